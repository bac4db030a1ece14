# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Custom exception hierarchy for rastergrid.

Loaders never terminate the process themselves. They raise one of the
exceptions below and the caller decides what to do with it, normally by
handing it to :class:`rastergrid.reporting.ErrorReporter`, which echoes the
message to both sinks and exits the run.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional, Tuple, TypeVar, Union


class RasterGridError(Exception):
    """
    Base exception for all rastergrid-specific errors.

    All custom exceptions in rastergrid inherit from this class, so a single
    except clause catches every failure the package raises on purpose.
    """
    pass


class ConfigurationError(RasterGridError):
    """
    Configuration-related errors.

    Raised when:
    - The configuration file cannot be found, read or parsed
    - Required grid context keys are missing
    - Configuration values fail validation
    """
    pass


class ReaderStateError(RasterGridError):
    """
    A grid file reader operation was called out of order.

    This is a programming error in the caller (e.g. reading the body before
    the metadata has been validated), not a problem with the input file.
    """
    pass


class RasterInputError(RasterGridError):
    """
    Base class for failures caused by a raster input file.

    Every subclass is fatal to the run. ``title`` is the human-readable name
    of the input (e.g. ``"DEM Skyview"``) used when the error is reported.
    """

    def __init__(self, message: str, path: Union[str, Path, None] = None,
                 title: str = "Raster Grid"):
        super().__init__(message)
        self.path = Path(path) if path is not None else None
        self.title = title

    def report_lines(self) -> List[str]:
        """Lines written to the echo file and the console when this error is fatal."""
        return [f"{self.title} File Error:", f"  {self}"]


class FileOpenError(RasterInputError):
    """
    The raster file could not be opened for reading.

    Raised when:
    - The path does not exist
    - The path is a directory
    - The process lacks permission to read it
    """

    def __init__(self, path: Union[str, Path], title: str = "Raster Grid",
                 reason: Optional[str] = None):
        message = f"Can't open {title} File : {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, path=path, title=title)
        self.reason = reason

    def report_lines(self) -> List[str]:
        return [f"Error! Can't open {self.title} File : {self.path}"]


GridTriple = Tuple[int, int, float]


class DimensionMismatch(RasterInputError):
    """
    Declared grid shape or cell size disagrees with the simulation grid.

    ``expected`` and ``actual`` are (rows, columns, cell_size) triples. Cell
    sizes are compared exactly, so the report prints both values in full.
    """

    def __init__(self, expected: GridTriple, actual: GridTriple,
                 path: Union[str, Path, None] = None, title: str = "Raster Grid"):
        self.expected = tuple(expected)
        self.actual = tuple(actual)
        message = (
            f"grid dimensions do not match the simulation grid: "
            f"expected rows={expected[0]}, columns={expected[1]}, cell size={expected[2]!r}; "
            f"found rows={actual[0]}, columns={actual[1]}, cell size={actual[2]!r}"
        )
        super().__init__(message, path=path, title=title)

    def report_lines(self) -> List[str]:
        nrows, ncols, dx = self.expected
        gridrows, gridcols, cellsize = self.actual
        # Cells are square, dy always equals dx
        return [
            f"{self.title} File Error:",
            f"  nrows = {nrows:5d}   grid rows = {gridrows:5d}",
            f"  ncols = {ncols:5d}   grid cols = {gridcols:5d}",
            f"  dx = {dx:12.4f}   dy = {dx:12.4f}   cell size = {cellsize:12.4f}",
        ]


class MalformedMetadata(RasterInputError):
    """
    The metadata record could not be parsed.

    Raised when:
    - The file ends before all six label/value pairs were read
    - A value token does not convert to the expected numeric type
    """
    pass


class MalformedBody(RasterInputError):
    """
    The body of cell values could not be parsed.

    Raised when:
    - A cell token is not a floating-point number
    - The file ends before rows x columns values were read
    """
    pass


# =============================================================================
# Validation Helpers
# =============================================================================

T = TypeVar('T')


def require(condition: bool, message: str, error_type: type = None) -> None:
    """
    Validate a condition, raising an exception if it fails.

    Args:
        condition: The condition that must be True
        message: Error message if condition is False
        error_type: Exception type to raise (default: ConfigurationError)

    Raises:
        ConfigurationError (or specified error_type) if condition is False

    Example:
        >>> require(rows > 0, "Grid rows must be positive")
    """
    if error_type is None:
        error_type = ConfigurationError
    if not condition:
        raise error_type(message)


@contextmanager
def raster_error_handler(
    operation: str,
    logger: Optional[logging.Logger] = None,
    reraise: bool = True,
    error_type: type = RasterGridError
):
    """
    Context manager for standardized error handling.

    rastergrid errors pass through unchanged. Any other exception is logged
    and converted to ``error_type`` so callers only have to catch the
    package hierarchy.

    Args:
        operation: Description of the operation being performed (for logging)
        logger: Logger instance for error messages. If None, errors are not logged.
        reraise: Whether to re-raise the exception after handling (default: True)
        error_type: rastergrid exception type to convert generic exceptions to

    Example:
        >>> with raster_error_handler("writing grid", logger):
        ...     write_grid_file(path, buffer)
    """
    try:
        yield
    except RasterGridError:
        if logger:
            logger.error(f"Error during {operation}", exc_info=True)
        if reraise:
            raise
    except Exception as e:
        if logger:
            logger.error(f"Error during {operation}: {e}", exc_info=True)
        if reraise:
            raise error_type(f"Failed during {operation}: {e}") from e


__all__ = [
    # Base
    'RasterGridError',
    'ConfigurationError',
    'ReaderStateError',
    # Input errors
    'RasterInputError',
    'FileOpenError',
    'DimensionMismatch',
    'MalformedMetadata',
    'MalformedBody',
    # Helpers
    'require',
    'raster_error_handler',
]
