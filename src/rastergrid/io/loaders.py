# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Raster input loaders.

Every spatial input of the model goes through the same contract: console
banner, echo section, header echo, metadata check against the simulation
grid, characteristics echo, body read. A ``RasterInputSpec`` carries the only
parts that differ between inputs, the names used in the banner, the echo file
and error reports.

:func:`load_raster_grid` raises typed errors. :func:`load_or_exit` is the
standard caller path: it reports fatal errors through an ErrorReporter and
ends the run.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from rastergrid.core.config import GridContext, LoaderConfig
from rastergrid.io.grid_file import GridFileReader
from rastergrid.io.grid_store import GridBuffer
from rastergrid.reporting.echo import CONSOLE_LOGGER_NAME, EchoWriter, format_banner
from rastergrid.reporting.error_reporter import ErrorReporter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RasterInputSpec:
    """Names used when loading one kind of raster input."""

    name: str
    title: str
    echo_label: str
    characteristics_label: str


SKYVIEW = RasterInputSpec(
    name='skyview',
    title='DEM Skyview',
    echo_label='DEM Grid Cell Skyview (in Degrees)',
    characteristics_label='DEM Grid Cell Skyview',
)

GENERIC = RasterInputSpec(
    name='grid',
    title='Raster Grid',
    echo_label='Raster Grid Cell Values',
    characteristics_label='Raster Grid',
)

RASTER_INPUTS: Dict[str, RasterInputSpec] = {
    spec.name: spec for spec in (SKYVIEW, GENERIC)
}


def get_input_spec(name: str) -> RasterInputSpec:
    """Look up a registered raster input by name."""
    try:
        return RASTER_INPUTS[name.lower()]
    except KeyError:
        available = ", ".join(sorted(RASTER_INPUTS))
        raise ValueError(f"Unknown raster input '{name}'. Available: {available}") from None


def load_raster_grid(
    path: Union[str, Path],
    context: GridContext,
    spec: RasterInputSpec = GENERIC,
    settings: Optional[LoaderConfig] = None,
    echo: Optional[EchoWriter] = None,
    console: Optional[logging.Logger] = None,
) -> GridBuffer:
    """
    Load a raster grid file that must match the simulation grid.

    Args:
        path: Grid file to read
        context: Simulation grid the file must match exactly
        spec: Names used in the banner, echo file and error reports
        settings: Loader settings (header size, cell echo)
        echo: Echo file sink
        console: Console logger for the banner

    Returns:
        A fully populated GridBuffer owned by the caller

    Raises:
        FileOpenError: The file cannot be opened
        MalformedMetadata: The metadata record cannot be parsed
        DimensionMismatch: Rows, columns or cell size differ from ``context``
        MalformedBody: A cell value is invalid or missing
    """
    settings = settings if settings is not None else LoaderConfig()
    echo = echo if echo is not None else EchoWriter()
    console = console if console is not None else logging.getLogger(CONSOLE_LOGGER_NAME)

    console.info("\n")
    for line in format_banner(spec.title):
        console.info(line)
    console.info("\n")

    reader = GridFileReader(
        path,
        title=spec.title,
        echo=echo,
        max_header_size=settings.max_header_size,
        echo_cell_values=settings.echo_cell_values,
    )
    with reader:
        echo.section(spec.echo_label)
        reader.read_header_line()
        metadata = reader.read_metadata()
        reader.validate_metadata(context)
        echo.characteristics(spec.characteristics_label, metadata)
        buffer = reader.read_body()

    logger.info(f"Loaded {spec.title} grid {metadata.rows}x{metadata.columns} from {path}")
    return buffer


def load_or_exit(
    path: Union[str, Path],
    context: GridContext,
    spec: RasterInputSpec = GENERIC,
    settings: Optional[LoaderConfig] = None,
    reporter: Optional[ErrorReporter] = None,
    echo: Optional[EchoWriter] = None,
    console: Optional[logging.Logger] = None,
) -> GridBuffer:
    """Load a grid, reporting any input error through both sinks and ending the run."""
    reporter = reporter if reporter is not None else ErrorReporter()
    if echo is None:
        echo = EchoWriter(reporter.echo)
    if console is None:
        console = reporter.console
    with reporter.fatal_on_error(f"loading {spec.title} file {path}"):
        return load_raster_grid(path, context, spec, settings, echo=echo, console=console)


def load_skyview(
    path: Union[str, Path],
    context: GridContext,
    settings: Optional[LoaderConfig] = None,
    reporter: Optional[ErrorReporter] = None,
) -> GridBuffer:
    """Load the DEM sky-view factor grid (0-1 per overland cell)."""
    return load_or_exit(path, context, SKYVIEW, settings, reporter)
