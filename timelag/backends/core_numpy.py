from typing import Tuple

import numpy as np


def _lag_rows_core(series: np.ndarray, lags: Tuple[int, ...], fill, pad, row_stride: int) -> np.ndarray:
    """
    Build the lagged rows of a batch of series with NumPy slicing.

    Parameters
    ----------
    series : ndarray, shape (S, L)
        One series per row.
    lags : tuple of int
        Lag offsets, one group of ``S`` output rows per entry.
    fill : scalar
        Value written where a lag reaches before the first observation.
    pad : scalar
        Value written into the columns ``L..row_stride``.
    row_stride : int
        Width of every output row, at least ``L``.

    Returns
    -------
    ndarray, shape (len(lags) * S, row_stride)
    """
    n_series, length = series.shape

    # Everything starts out as padding, real data and fill are written over it
    out = np.full((len(lags) * n_series, row_stride), pad, dtype=series.dtype)

    for i, lag in enumerate(lags):
        block = out[i * n_series:(i + 1) * n_series]
        shift = min(lag, length)
        block[:, :shift] = fill
        block[:, shift:length] = series[:, :length - shift]

    return out
