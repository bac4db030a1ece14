# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Echo file output shared by all raster loaders.

The echo file is the persistent record of a run: every loader writes a titled
section, the verbatim header line, the grid characteristics and optionally
every cell value. Output goes through the ``rastergrid.echo`` logger, which
:class:`rastergrid.project.logging_manager.LoggingManager` attaches to the
echo file.
"""

import logging
from typing import Iterable, List, Optional, TYPE_CHECKING

from rastergrid.core.constants import EchoFormat

if TYPE_CHECKING:
    from rastergrid.io.grid_file import GridMetadata

ECHO_LOGGER_NAME = "rastergrid.echo"
CONSOLE_LOGGER_NAME = "rastergrid.console"


def format_banner(title: str) -> List[str]:
    """Boxed 'Reading <title> File' banner shown on the console when a load starts."""
    text = f"Reading {title} File"
    width = max(EchoFormat.BANNER_WIDTH, len(text) + 6)
    inner = width - 2
    return [
        "*" * width,
        "*" + " " * inner + "*",
        "*" + text.center(inner) + "*",
        "*" + " " * inner + "*",
        "*" * width,
    ]


class EchoWriter:
    """Formats loader output for the echo file."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger if logger is not None else logging.getLogger(ECHO_LOGGER_NAME)

    def section(self, label: str) -> None:
        self.logger.info(f"\n\n\n  {label}  ")
        self.logger.info("~" * (len(label) + 4))

    def header(self, text: str) -> None:
        self.logger.info(f"\n{text}\n")

    def characteristics(self, label: str, metadata: 'GridMetadata') -> None:
        self.logger.info(f"\n{label} Characteristics:")
        self.logger.info(EchoFormat.GRID_ROWS.format(metadata.rows))
        self.logger.info(EchoFormat.GRID_COLUMNS.format(metadata.columns))
        self.logger.info(EchoFormat.CELL_SIZE.format(metadata.cell_size))
        self.logger.info(EchoFormat.NODATA.format(metadata.nodata))

    def cell_row(self, values: Iterable[float]) -> None:
        self.logger.info("".join(EchoFormat.CELL.format(float(v)) for v in values))
