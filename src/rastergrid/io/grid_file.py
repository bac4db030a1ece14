# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Raster grid text file reader.

A grid file has three sections::

    line 1     free-form header text (echoed, never parsed)
    record 2   six label/value pairs: ncols, nrows, xllcorner, yllcorner,
               cellsize, nodata (labels are read and discarded)
    body       nrows * ncols whitespace-delimited floats, row-major

The reader walks a fixed state machine::

    CLOSED -> OPEN -> HEADER_READ -> METADATA_READ -> METADATA_VALIDATED
           -> BODY_LOADED -> FINISHED

Any input error moves it to ABORTED, closes the file and re-raises. There is
no way back from ABORTED and no partially filled buffer ever leaves
:meth:`GridFileReader.read_body`.
"""

import functools
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, TextIO, Tuple, Union

from rastergrid.core.config import GridContext
from rastergrid.core.constants import GridFileFormat
from rastergrid.core.exceptions import (
    DimensionMismatch,
    FileOpenError,
    MalformedBody,
    MalformedMetadata,
    RasterInputError,
    ReaderStateError,
)
from rastergrid.io.grid_store import GridBuffer
from rastergrid.io.tokenizer import TokenStream
from rastergrid.reporting.echo import EchoWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridMetadata:
    """Parsed metadata record of a raster grid file."""

    columns: int
    rows: int
    xllcorner: float
    yllcorner: float
    cell_size: float
    nodata: int
    labels: Tuple[str, ...] = GridFileFormat.DEFAULT_LABELS

    @property
    def triple(self) -> Tuple[int, int, float]:
        """(rows, columns, cell_size), the values checked against the grid context."""
        return (self.rows, self.columns, self.cell_size)

    @property
    def cell_count(self) -> int:
        return self.rows * self.columns


class ReaderState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    HEADER_READ = "header_read"
    METADATA_READ = "metadata_read"
    METADATA_VALIDATED = "metadata_validated"
    BODY_LOADED = "body_loaded"
    FINISHED = "finished"
    ABORTED = "aborted"


def _parse_integral(token: str) -> int:
    """int() that also accepts integral float literals such as ``-9999.0``."""
    try:
        return int(token)
    except ValueError:
        value = float(token)
        if not value.is_integer():
            raise ValueError(f"not an integral value: {token!r}")
        return int(value)


_METADATA_CONVERTERS: Tuple[Tuple[str, Callable[[str], Union[int, float]]], ...] = (
    ('columns', int),
    ('rows', int),
    ('xllcorner', float),
    ('yllcorner', float),
    ('cell_size', float),
    ('nodata', _parse_integral),
)


def _step(required: ReaderState, target: ReaderState):
    """Guard a reader operation: check the current state, advance on success, abort on input errors."""
    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            if self.state is not required:
                raise ReaderStateError(
                    f"{method.__name__}() requires reader state {required.value}, "
                    f"current state is {self.state.value}"
                )
            try:
                result = method(self, *args, **kwargs)
            except RasterInputError:
                self._abort()
                raise
            self.state = target
            return result
        return wrapper
    return decorator


class GridFileReader:
    """
    Step-wise reader for one raster grid file.

    Typical use goes through :func:`rastergrid.io.loaders.load_raster_grid`;
    the individual steps are public so other raster loaders can interleave
    their own echo output the same way.

    Args:
        path: Grid file to read
        title: Human-readable input name used in error reports
        echo: Echo sink receiving the header and cell rows
        max_header_size: Characters of the header line kept for the echo
        echo_cell_values: Whether every body row is echoed
    """

    def __init__(
        self,
        path: Union[str, Path],
        title: str = "Raster Grid",
        echo: Optional[EchoWriter] = None,
        max_header_size: int = GridFileFormat.MAX_HEADER_SIZE,
        echo_cell_values: bool = True,
    ):
        self.path = Path(path)
        self.title = title
        self.echo = echo if echo is not None else EchoWriter()
        self.max_header_size = max_header_size
        self.echo_cell_values = echo_cell_values

        self.state = ReaderState.CLOSED
        self.header: Optional[str] = None
        self.metadata: Optional[GridMetadata] = None
        self._handle: Optional[TextIO] = None
        self._tokens: Optional[TokenStream] = None

    # ---- context manager ----

    def __enter__(self) -> 'GridFileReader':
        if self.state is ReaderState.CLOSED:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ---- steps ----

    @_step(ReaderState.CLOSED, ReaderState.OPEN)
    def open(self) -> None:
        """Open the grid file for reading."""
        try:
            self._handle = open(self.path, 'r', encoding='utf-8', errors='replace')
        except OSError as exc:
            raise FileOpenError(self.path, self.title, reason=exc.strerror) from exc
        logger.debug(f"Opened {self.title} file {self.path}")

    @_step(ReaderState.OPEN, ReaderState.HEADER_READ)
    def read_header_line(self) -> str:
        """Read the free-form header line and forward it to the echo sink."""
        header = self._handle.readline().rstrip('\r\n')
        if len(header) > self.max_header_size:
            logger.warning(
                f"{self.title} header longer than {self.max_header_size} characters, truncated for echo"
            )
            header = header[:self.max_header_size]
        self.header = header
        self.echo.header(header)
        self._tokens = TokenStream(self._handle, first_line=2)
        return header

    @_step(ReaderState.HEADER_READ, ReaderState.METADATA_READ)
    def read_metadata(self) -> GridMetadata:
        """
        Read the six label/value pairs of the metadata record.

        Labels are positional placeholders: any token is accepted and
        discarded, so a file with misspelled labels but correctly ordered
        values loads normally.
        """
        labels = []
        values = {}
        for name, convert in _METADATA_CONVERTERS:
            label = self._tokens.next()
            token = self._tokens.next() if label is not None else None
            if token is None:
                raise MalformedMetadata(
                    f"unexpected end of file while reading {name} "
                    f"(line {self._tokens.line_number})",
                    path=self.path, title=self.title,
                )
            try:
                values[name] = convert(token)
            except ValueError:
                raise MalformedMetadata(
                    f"invalid {name} value '{token}' after label '{label}' "
                    f"(line {self._tokens.line_number})",
                    path=self.path, title=self.title,
                ) from None
            labels.append(label)

        self.metadata = GridMetadata(labels=tuple(labels), **values)
        logger.debug(f"{self.title} metadata: {self.metadata}")
        return self.metadata

    @_step(ReaderState.METADATA_READ, ReaderState.METADATA_VALIDATED)
    def validate_metadata(self, context: GridContext) -> GridMetadata:
        """
        Check declared rows, columns and cell size against the simulation grid.

        Comparison is exact, including the floating-point cell size.
        """
        if self.metadata.triple != context.as_triple():
            raise DimensionMismatch(
                expected=context.as_triple(),
                actual=self.metadata.triple,
                path=self.path, title=self.title,
            )
        return self.metadata

    @_step(ReaderState.METADATA_VALIDATED, ReaderState.BODY_LOADED)
    def read_body(self) -> GridBuffer:
        """Read rows x columns values in row-major order into a new GridBuffer."""
        rows, cols = self.metadata.rows, self.metadata.columns
        buffer = GridBuffer.allocate(rows, cols, self.metadata)
        storage = buffer.storage

        for row in range(1, rows + 1):
            for col in range(1, cols + 1):
                token = self._tokens.next()
                if token is None:
                    read = (row - 1) * cols + col - 1
                    raise MalformedBody(
                        f"unexpected end of file at cell ({row}, {col}): "
                        f"expected {rows * cols} values, found {read}",
                        path=self.path, title=self.title,
                    )
                try:
                    storage[row, col] = float(token)
                except ValueError:
                    raise MalformedBody(
                        f"invalid value '{token}' for cell ({row}, {col}) "
                        f"(line {self._tokens.line_number})",
                        path=self.path, title=self.title,
                    ) from None
            if self.echo_cell_values:
                self.echo.cell_row(storage[row, 1:])

        if not self._tokens.at_end():
            logger.warning(
                f"{self.title} file {self.path} has values after the last grid cell; they were ignored"
            )
        return buffer

    def close(self) -> None:
        """Close the file. Safe to call more than once."""
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            self._tokens = None
        if self.state is not ReaderState.ABORTED:
            self.state = ReaderState.FINISHED

    def _abort(self) -> None:
        self.state = ReaderState.ABORTED
        self.close()

    # ---- full sequence ----

    def read_all(self, context: GridContext) -> GridBuffer:
        """Run every step from a closed reader through a loaded body, then close the file."""
        if self.state is ReaderState.CLOSED:
            self.open()
        self.read_header_line()
        self.read_metadata()
        self.validate_metadata(context)
        buffer = self.read_body()
        self.close()
        return buffer
