# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Constants for the raster grid text format and the echo file layout.

Centralizes the values shared by the reader, the writer and the reporters so
every raster input loader formats its echo and error output the same way.
"""

from typing import Tuple


EXIT_FAILURE = 1
"""Process exit status used for every fatal input error."""


class GridFileFormat:
    """
    Layout of the raster grid text format.

    The metadata record is six label/value pairs in a fixed order. Labels are
    never matched; only the position of each value matters.
    """

    METADATA_FIELDS: Tuple[str, ...] = (
        'columns',
        'rows',
        'xllcorner',
        'yllcorner',
        'cell_size',
        'nodata',
    )
    """Positional order of the metadata values."""

    DEFAULT_LABELS: Tuple[str, ...] = (
        'ncols',
        'nrows',
        'xllcorner',
        'yllcorner',
        'cellsize',
        'NODATA_value',
    )
    """Labels written by the grid writer."""

    MAX_HEADER_SIZE = 256
    """Default maximum number of header characters kept for the echo."""

    DEFAULT_NODATA = -9999
    """Conventional no-data sentinel."""


class EchoFormat:
    """printf-style layouts of the echo file, shared by all raster loaders."""

    CELL = "  {:10.4f}"
    GRID_ROWS = "   Grid Rows = {:5d}"
    GRID_COLUMNS = "   Grid Columns = {:5d}"
    CELL_SIZE = "   Cell size = {:10.2f} (m)"
    NODATA = "   No Data Value = {:6d}"
    BANNER_WIDTH = 32
