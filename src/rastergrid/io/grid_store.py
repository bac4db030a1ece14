# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
GridBuffer: the in-memory grid handed to the simulation.

The model addresses cells with 1-based (row, column) indices. The buffer keeps
that convention by over-allocating: storage is (rows+1) x (cols+1) and row 0
and column 0 are NaN placeholders that are never read or written through the
public accessors. ``cells`` exposes the valid region as an ordinary 0-based
numpy view for vectorised consumers.
"""

from typing import Iterator, Optional, Tuple, TYPE_CHECKING, Union

import numpy as np

if TYPE_CHECKING:
    from rastergrid.io.grid_file import GridMetadata


class GridBuffer:
    """Owned 2-D float64 grid with 1-based row/column addressing."""

    def __init__(self, data: np.ndarray, metadata: Optional['GridMetadata'] = None):
        if data.ndim != 2 or data.shape[0] < 2 or data.shape[1] < 2:
            raise ValueError(
                f"GridBuffer storage must be 2-D with at least one valid cell, got shape {data.shape}"
            )
        self._data = data
        self.metadata = metadata

    @classmethod
    def allocate(cls, rows: int, cols: int,
                 metadata: Optional['GridMetadata'] = None) -> 'GridBuffer':
        """Allocate a buffer whose valid cells are [1..rows] x [1..cols]."""
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid must have at least one row and column, got {rows}x{cols}")
        return cls(np.full((rows + 1, cols + 1), np.nan, dtype=np.float64), metadata)

    @classmethod
    def from_array(cls, values, metadata: Optional['GridMetadata'] = None) -> 'GridBuffer':
        """Wrap a 0-based (rows, cols) array, copying it into 1-based storage."""
        values = np.asarray(values, dtype=np.float64)
        if values.ndim != 2:
            raise ValueError(f"Expected a 2-D array, got {values.ndim}-D")
        buffer = cls.allocate(values.shape[0], values.shape[1], metadata)
        buffer._data[1:, 1:] = values
        return buffer

    @property
    def rows(self) -> int:
        return self._data.shape[0] - 1

    @property
    def cols(self) -> int:
        return self._data.shape[1] - 1

    @property
    def shape(self) -> Tuple[int, int]:
        """Logical (rows, cols) shape."""
        return (self.rows, self.cols)

    @property
    def storage(self) -> np.ndarray:
        """Full (rows+1, cols+1) storage including the unused row 0 and column 0."""
        return self._data

    @property
    def cells(self) -> np.ndarray:
        """0-based view of the valid cells."""
        return self._data[1:, 1:]

    def _check(self, row: int, col: int) -> None:
        if not (1 <= row <= self.rows and 1 <= col <= self.cols):
            raise IndexError(
                f"Cell ({row}, {col}) outside grid [1..{self.rows}] x [1..{self.cols}]"
            )

    def get(self, row: int, col: int) -> float:
        self._check(row, col)
        return float(self._data[row, col])

    def set(self, row: int, col: int, value: float) -> None:
        self._check(row, col)
        self._data[row, col] = value

    def __getitem__(self, index: Union[int, Tuple[int, int]]):
        """
        ``buffer[r, c]`` returns one cell. ``buffer[r]`` returns row ``r`` as a
        storage view, so ``buffer[r][c]`` also addresses columns from 1 and
        ``buffer[r][0]`` is the NaN placeholder.
        """
        if isinstance(index, tuple):
            row, col = index
            return self.get(row, col)
        if not 1 <= index <= self.rows:
            raise IndexError(f"Row {index} outside grid [1..{self.rows}]")
        return self._data[index]

    def __setitem__(self, index: Tuple[int, int], value: float) -> None:
        row, col = index
        self.set(row, col, value)

    def iter_rows(self) -> Iterator[Tuple[int, np.ndarray]]:
        """Yield (row, values) pairs, row numbered from 1, values 0-based."""
        for row in range(1, self.rows + 1):
            yield row, self._data[row, 1:]

    def masked(self, nodata: Optional[float] = None) -> np.ma.MaskedArray:
        """Valid cells with no-data cells masked; defaults to the metadata no-data value."""
        if nodata is None and self.metadata is not None:
            nodata = self.metadata.nodata
        if nodata is None:
            return np.ma.masked_invalid(self.cells)
        return np.ma.masked_where(self.cells == nodata, self.cells)

    def __repr__(self) -> str:
        return f"GridBuffer(rows={self.rows}, cols={self.cols})"
