"""Core configuration, constants and exceptions."""

from .constants import EXIT_FAILURE, EchoFormat, GridFileFormat
from .exceptions import (
    ConfigurationError,
    DimensionMismatch,
    FileOpenError,
    MalformedBody,
    MalformedMetadata,
    RasterGridError,
    RasterInputError,
    ReaderStateError,
    raster_error_handler,
    require,
)

__all__ = [
    'EXIT_FAILURE',
    'EchoFormat',
    'GridFileFormat',
    'ConfigurationError',
    'DimensionMismatch',
    'FileOpenError',
    'MalformedBody',
    'MalformedMetadata',
    'RasterGridError',
    'RasterInputError',
    'ReaderStateError',
    'raster_error_handler',
    'require',
]
