from typing import Optional, Union

import numpy as np
import pandas as pd

from .. import config
from ..errors import ShapeMismatch
from ..layout import MatrixLayout
from ..matrix import LagMatrix
from ..shape import Lags, normalize_lags
from .builders import LagMatrixBuilder


def lag_matrix_from_array(array, lags: Lags, fill, out_row_len: Optional[int] = None, pad=None,
                          rowvar: bool = True, backend: Optional[str] = None) -> np.ndarray:
    """
    Create a time-lagged matrix from a 1D or 2D array.

    Parameters
    ----------
    array : array_like, shape (L,) or 2D
        Time series data.
    lags : int or iterable of int
        Highest lag, or the lag offsets to produce.
    fill : scalar
        Value used for lag positions without history.
    out_row_len : int, optional
        Row stride of the underlying buffer. Padding is not part of the
        returned view.
    pad : scalar, optional
        Value of the padding columns; defaults to ``fill``.
    rowvar : bool, default=True
        For 2D input: if True each row is a series, otherwise each column
        is a series with observations in rows.
    backend : str, optional
        Computational backend.

    Returns
    -------
    ndarray
        Read-only view; shape ``(n_lags, L)`` for 1D input,
        ``(S * n_lags, L)`` for ``rowvar=True`` and ``(L, S * n_lags)``
        for ``rowvar=False``.
    """
    data = np.asarray(array)
    builder = LagMatrixBuilder(lags, fill, out_row_len, pad, backend)

    if data.ndim == 1:
        return _visible(builder.build(data))
    if data.ndim != 2:
        raise ShapeMismatch(f"Expected a 1D or 2D array, got shape {data.shape}")

    flat = np.ascontiguousarray(data).reshape(-1)
    if rowvar:
        return _visible(builder.build_2d(flat, MatrixLayout.row_major(data.shape[1])))

    # Observations in rows: the C-ordered buffer interleaves the series
    return _visible(builder.build_2d(flat, MatrixLayout.column_major(data.shape[0]))).T


def _visible(matrix: LagMatrix) -> np.ndarray:
    return matrix.as_2d()[:, :matrix.series_length]


def lag_frame(data: Union[pd.Series, pd.DataFrame], lags: Lags, fill=config.DEFAULT_FILL,
              backend: Optional[str] = None) -> pd.DataFrame:
    """
    Lag every column of a Series or DataFrame.

    Parameters
    ----------
    data : Series or DataFrame
        Observations in rows, variables in columns.
    lags : int or iterable of int
        Highest lag, or the lag offsets to produce.
    fill : scalar, default=nan
        Value used for lag positions without history.
    backend : str, optional
        Computational backend.

    Returns
    -------
    DataFrame
        Indexed like ``data``. Lag 0 keeps the column name, lag ``j`` is
        named ``<name>.L.<j>``; columns are ordered by lag, then by variable.
    """
    if isinstance(data, pd.Series):
        frame = data.to_frame(name="x" if data.name is None else data.name)
    elif isinstance(data, pd.DataFrame):
        frame = data
    else:
        raise TypeError(f"Expected a pandas Series or DataFrame, got {type(data).__name__}")

    offsets = normalize_lags(lags)
    values = lag_matrix_from_array(frame.to_numpy(), offsets, fill, rowvar=False, backend=backend)

    columns = [
        name if lag == 0 else f"{name}.L.{lag}"
        for lag in offsets
        for name in frame.columns
    ]
    return pd.DataFrame(values, index=frame.index, columns=columns, copy=True)
