import numbers
from typing import Iterable, Optional, Tuple, Union

import numpy as np

from .errors import InvalidConfiguration, ShapeMismatch
from .layout import MatrixLayout

Lags = Union[int, Iterable[int]]


def normalize_lags(lags: Lags) -> Tuple[int, ...]:
    """
    Materialize a lag specification into a tuple of lag offsets.

    Parameters
    ----------
    lags : int or iterable of int
        Either the highest lag ``k`` (all lags ``0..k`` are produced) or an
        arbitrary iterable of non-negative lags. Order and repetitions are kept.

    Returns
    -------
    tuple of int
        The lag offsets, one output row per entry and series.
    """
    if _is_lag(lags):
        if lags < 0:
            raise InvalidConfiguration(f"Number of lags must be non-negative, got {lags}")
        return tuple(range(int(lags) + 1))

    try:
        values = tuple(lags)
    except TypeError:
        raise InvalidConfiguration(f"Lags must be an integer or an iterable of integers, got {lags!r}")

    for lag in values:
        if not _is_lag(lag):
            raise InvalidConfiguration(f"Lag offsets must be integers, got {lag!r}")
        if lag < 0:
            raise InvalidConfiguration(f"Lag offsets must be non-negative, got {lag}")
    return tuple(int(lag) for lag in values)


def _is_lag(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, (bool, np.bool_))


def resolve_row_stride(length: int, out_row_len: Optional[int]) -> int:
    """
    Row stride of the output; ``None`` means one slot per observation.

    Raises
    ------
    InvalidConfiguration
        If the stride would truncate the series.
    """
    if out_row_len is None:
        return length
    if not _is_lag(out_row_len):
        raise InvalidConfiguration(f"Row stride must be an integer, got {out_row_len!r}")
    if out_row_len < length:
        raise InvalidConfiguration(
            f"Row stride {out_row_len} is smaller than the series length {length}"
        )
    return int(out_row_len)


def output_shape(length: int, n_lags: int, out_row_len: Optional[int], n_series: int = 1) -> Tuple[int, int]:
    """(row_count, col_count) of the lag matrix for the given configuration."""
    return n_series * n_lags, resolve_row_stride(length, out_row_len)


def row_position(lag_position: int, series_index: int, n_series: int) -> int:
    # Rows are grouped by lag first, then by series
    return lag_position * n_series + series_index


def flat_offset(row: int, col: int, row_stride: int) -> int:
    return row * row_stride + col


def series_rows(data: np.ndarray, layout: MatrixLayout) -> np.ndarray:
    """
    Degather a flat buffer into a contiguous ``(S, L)`` array, one series per row.

    Parameters
    ----------
    data : ndarray, shape (S * L,)
        Flat buffer laid out according to ``layout``.
    layout : MatrixLayout
        Declares the per-series length and whether series are rows or columns.

    Returns
    -------
    ndarray, shape (S, L)
    """
    if data.ndim != 1:
        raise ShapeMismatch(f"Expected a flat buffer, got an array with shape {data.shape}")

    n_series = layout.series_count(data.shape[0])
    if layout.is_row_major:
        return np.ascontiguousarray(data.reshape(n_series, layout.width))
    # Series s sits at s, s + S, s + 2S, ...
    return np.ascontiguousarray(data.reshape(layout.width, n_series).T)
