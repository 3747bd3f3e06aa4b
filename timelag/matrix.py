from typing import Optional, Sequence, Tuple

import numpy as np

from .errors import IndexOutOfBounds, ShapeMismatch
from .shape import flat_offset, row_position


class LagMatrix:
    """
    Flat lag matrix buffer together with the shape needed to read it as 2D.

    The buffer is stored row after row; every row is ``col_count`` values
    wide. For a batch of series the rows are ordered by lag first and series
    second, so row ``j * series_count + s`` holds lag position ``j`` of
    series ``s``.

    Parameters
    ----------
    data : array_like, shape (row_count * col_count,)
        The flat buffer. It is taken over without a copy when it already is
        a one-dimensional ndarray, and marked read-only.
    row_count : int
        Number of rows.
    col_count : int
        Row stride, i.e. number of values per row including padding.
    series_count : int, default=1
        Number of series the rows were built from.
    series_length : int, optional
        Number of real observations per row; defaults to ``col_count``.
    lags : tuple of int, optional
        Lag offsets that produced each group of rows.

    Attributes
    ----------
    row_count : int
    col_count : int
    series_count : int
    series_length : int
    lags : tuple of int or None
    """

    __hash__ = None

    def __init__(self, data, row_count: int, col_count: int, series_count: int = 1,
                 series_length: Optional[int] = None, lags: Optional[Tuple[int, ...]] = None):
        data = np.asarray(data)
        if data.ndim != 1:
            data = data.reshape(-1)
        if data.shape[0] != row_count * col_count:
            raise ShapeMismatch(
                f"Buffer of {data.shape[0]} values does not match {row_count}x{col_count}"
            )
        data = data.view()
        data.flags.writeable = False

        self._data = data
        self.row_count = row_count
        self.col_count = col_count
        self.series_count = series_count
        self.series_length = col_count if series_length is None else series_length
        self.lags = lags

    @classmethod
    def from_array(cls, data, row_count: int, col_count: int, series_count: int = 1) -> 'LagMatrix':
        """Wrap a flat buffer, e.g. one obtained from :meth:`to_numpy`."""
        return cls(np.array(data).reshape(-1), row_count, col_count, series_count=series_count)

    @property
    def flat(self) -> np.ndarray:
        """Read-only flat view of the buffer in row-major storage order."""
        return self._data

    @property
    def shape(self) -> Tuple[int, int]:
        return self.row_count, self.col_count

    @property
    def num_lags(self) -> int:
        if self.lags is not None:
            return len(self.lags)
        return self.row_count // self.series_count if self.series_count else 0

    def as_2d(self) -> np.ndarray:
        """Read-only ``(row_count, col_count)`` view of the buffer."""
        return self._data.reshape(self.row_count, self.col_count)

    def row(self, index: int) -> np.ndarray:
        if not 0 <= index < self.row_count:
            raise IndexOutOfBounds(f"Row {index} outside of 0..{self.row_count}")
        start = flat_offset(index, 0, self.col_count)
        return self._data[start:start + self.col_count]

    def lagged_series(self, lag_position: int, series_index: int = 0) -> np.ndarray:
        """Row holding the ``lag_position``-th lag group of series ``series_index``."""
        if not 0 <= series_index < self.series_count:
            raise IndexOutOfBounds(f"Series {series_index} outside of 0..{self.series_count}")
        return self.row(row_position(lag_position, series_index, self.series_count))

    def to_numpy(self, copy: bool = False) -> np.ndarray:
        """
        Flat buffer of the matrix.

        Without ``copy`` the stored (read-only) buffer itself is returned;
        with ``copy`` the caller receives a writable copy.
        """
        if copy:
            return self._data.copy()
        return self._data

    def __getitem__(self, index: Tuple[int, int]):
        row, col = index
        if not (0 <= row < self.row_count and 0 <= col < self.col_count):
            raise IndexOutOfBounds(
                f"Index ({row}, {col}) outside of matrix with shape {self.shape}"
            )
        return self._data[flat_offset(row, col, self.col_count)]

    def __len__(self) -> int:
        return self._data.shape[0]

    def __array__(self, dtype=None, copy=None):
        array = self.as_2d()
        if dtype is not None and dtype != array.dtype:
            return array.astype(dtype)
        if copy:
            return array.copy()
        return array

    def __eq__(self, other) -> bool:
        if isinstance(other, LagMatrix):
            return self.shape == other.shape and np.array_equal(self._data, other._data)
        if isinstance(other, (np.ndarray, Sequence)) and not isinstance(other, (str, bytes)):
            try:
                values = np.asarray(other).reshape(-1)
            except ValueError:
                # Ragged nesting cannot match a flat buffer
                return False
            return values.shape == self._data.shape and bool(np.all(values == self._data))
        return NotImplemented

    def __repr__(self) -> str:
        return (
            f"LagMatrix(rows={self.row_count}, cols={self.col_count}, "
            f"series={self.series_count}, dtype={self._data.dtype})"
        )
