"""
Raster grid file I/O.

Reading (GridFileReader), the 1-based in-memory grid (GridBuffer), writing,
and the loader facade used by the model's spatial inputs.
"""

from .grid_file import GridFileReader, GridMetadata, ReaderState
from .grid_store import GridBuffer
from .grid_writer import format_grid_text, write_grid_file
from .loaders import (
    GENERIC,
    RASTER_INPUTS,
    SKYVIEW,
    RasterInputSpec,
    get_input_spec,
    load_or_exit,
    load_raster_grid,
    load_skyview,
)

__all__ = [
    'GridFileReader',
    'GridMetadata',
    'ReaderState',
    'GridBuffer',
    'format_grid_text',
    'write_grid_file',
    'GENERIC',
    'RASTER_INPUTS',
    'SKYVIEW',
    'RasterInputSpec',
    'get_input_spec',
    'load_or_exit',
    'load_raster_grid',
    'load_skyview',
]
