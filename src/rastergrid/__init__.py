"""
rastergrid - raster grid inputs for a watershed simulation grid.

Loads header-described raster text grids, checks them against the
simulation grid context, and reports fatal input errors to both the echo
file and the console.
"""
try:
    from .rastergrid_version import __version__
except ImportError:
    try:
        from importlib.metadata import version, PackageNotFoundError
        __version__ = version("rastergrid")
    except (ImportError, PackageNotFoundError):
        __version__ = "0.0.0"

from .core.config import GridContext, LoaderConfig, RasterGridConfig, load_config
from .core.exceptions import (
    DimensionMismatch,
    FileOpenError,
    MalformedBody,
    MalformedMetadata,
    RasterGridError,
    RasterInputError,
)
from .io import GridBuffer, GridFileReader, GridMetadata, load_raster_grid, load_skyview, write_grid_file
from .reporting import ErrorReporter

__all__ = [
    "__version__",
    "GridContext",
    "LoaderConfig",
    "RasterGridConfig",
    "load_config",
    "DimensionMismatch",
    "FileOpenError",
    "MalformedBody",
    "MalformedMetadata",
    "RasterGridError",
    "RasterInputError",
    "GridBuffer",
    "GridFileReader",
    "GridMetadata",
    "load_raster_grid",
    "load_skyview",
    "write_grid_file",
    "ErrorReporter",
]
