# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Raster grid text writer.

Writes a GridBuffer in the layout the reader accepts. Cell values are written
with ``repr`` so that reloading reproduces exactly the same float64 values.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from rastergrid.core.constants import GridFileFormat
from rastergrid.core.exceptions import FileOpenError, require
from rastergrid.io.grid_store import GridBuffer

logger = logging.getLogger(__name__)


def _format_number(value) -> str:
    if isinstance(value, int):
        return str(value)
    return repr(float(value))


def format_grid_text(
    buffer: GridBuffer,
    header: str = "",
    labels: Optional[Sequence[str]] = None,
) -> str:
    """
    Render ``buffer`` as raster grid text.

    The metadata record comes from ``buffer.metadata`` when present. Without
    metadata the grid is written with a zero origin, unit cell size and the
    conventional no-data value.
    """
    meta = buffer.metadata
    if labels is None:
        labels = meta.labels if meta is not None else GridFileFormat.DEFAULT_LABELS
    labels = tuple(labels)
    require(
        len(labels) == len(GridFileFormat.METADATA_FIELDS),
        f"Expected {len(GridFileFormat.METADATA_FIELDS)} metadata labels, got {len(labels)}",
        ValueError,
    )
    require(
        all(label and not any(ch.isspace() for ch in label) for label in labels),
        "Metadata labels must be non-empty and contain no whitespace",
        ValueError,
    )
    require("\n" not in header and "\r" not in header, "Header must be a single line", ValueError)

    values = (
        buffer.cols,
        buffer.rows,
        meta.xllcorner if meta else 0.0,
        meta.yllcorner if meta else 0.0,
        meta.cell_size if meta else 1.0,
        meta.nodata if meta else GridFileFormat.DEFAULT_NODATA,
    )

    lines = [header]
    lines.append(" ".join(f"{label} {_format_number(value)}" for label, value in zip(labels, values)))
    for _, row_values in buffer.iter_rows():
        lines.append(" ".join(repr(float(v)) for v in row_values))
    return "\n".join(lines) + "\n"


def write_grid_file(
    path: Union[str, Path],
    buffer: GridBuffer,
    header: str = "",
    labels: Optional[Sequence[str]] = None,
) -> Path:
    """Write ``buffer`` to ``path`` in raster grid text format."""
    path = Path(path)
    text = format_grid_text(buffer, header=header, labels=labels)
    try:
        path.write_text(text, encoding='utf-8')
    except OSError as exc:
        raise FileOpenError(path, "Raster Grid", reason=exc.strerror) from exc
    logger.debug(f"Wrote {buffer.rows}x{buffer.cols} grid to {path}")
    return path
