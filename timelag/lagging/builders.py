import logging
from typing import Optional

import numpy as np

from .. import config
from ..backend import LagBackend
from ..errors import InvalidConfiguration, ShapeMismatch
from ..layout import MatrixLayout
from ..matrix import LagMatrix
from ..shape import Lags, normalize_lags, output_shape, series_rows

logger = logging.getLogger(__name__)


class LagMatrixBuilder:
    """
    Builds time-lagged copies of one or several series.

    Every output row holds one lagged copy of one series: the value at
    column ``c`` of the lag-``j`` row is ``series[c - j]``, the first ``j``
    columns carry the fill value and the columns past the series length
    carry the pad value. Earlier observations are kept while later ones are
    dropped with each lag.

    Parameters
    ----------
    lags : int or iterable of int, default=0
        Highest lag ``k`` (lags ``0..k`` are produced) or an arbitrary
        iterable of non-negative lag offsets, kept in the given order.
    fill : scalar, default=nan
        Value written where a lag reaches before the first observation.
    out_row_len : int, optional
        Width of every output row. ``None`` uses the series length; a wider
        stride appends padding to the right of each row.
    pad : scalar, optional
        Value of the padding columns; defaults to ``fill``.
    backend : str, optional
        Computational backend {'numba', 'numpy', 'jax'}; defaults to
        ``timelag.config.DEFAULT_BACKEND``.

    Attributes
    ----------
    lags : tuple of int
        The materialized lag offsets.
    """

    def __init__(self, lags: Lags = 0, fill=config.DEFAULT_FILL,
                 out_row_len: Optional[int] = None, pad=None, backend: Optional[str] = None):
        self.lags = normalize_lags(lags)
        self.fill = fill
        self.out_row_len = out_row_len
        self.pad = fill if pad is None else pad
        self.backend = config.DEFAULT_BACKEND if backend is None else backend
        self._backend = LagBackend(backend=self.backend)

    def build(self, series) -> LagMatrix:
        """
        Lag a single series.

        Parameters
        ----------
        series : array_like, shape (L,)
            Observations in increasing time order.

        Returns
        -------
        LagMatrix
            ``len(lags)`` rows of ``out_row_len`` values.
        """
        data = np.asarray(series)
        if data.ndim != 1:
            raise ShapeMismatch(f"Expected a one-dimensional series, got shape {data.shape}")
        return self._build(data.reshape(1, -1))

    def build_2d(self, series, layout: MatrixLayout) -> LagMatrix:
        """
        Lag every series of a flat 2D buffer.

        Parameters
        ----------
        series : array_like, shape (S * L,)
            Flat buffer holding ``S`` series of length ``L = layout.width``.
        layout : MatrixLayout
            Whether the series are stored as rows or as columns.

        Returns
        -------
        LagMatrix
            ``S * len(lags)`` rows ordered by lag first, series second.
        """
        return self._build(series_rows(np.asarray(series), layout))

    def _build(self, rows: np.ndarray) -> LagMatrix:
        n_series, length = rows.shape

        # Validates the stride before anything is allocated
        row_count, row_stride = output_shape(length, len(self.lags), self.out_row_len, n_series)

        dtype = _element_type(rows, self.fill, self.pad)
        fill = _cast(dtype, self.fill, "Fill")
        pad = _cast(dtype, self.pad, "Pad")
        logger.debug(
            "Lagging %d series of length %d: lags=%s rows=%d stride=%d backend=%s",
            n_series, length, self.lags, row_count, row_stride, self.backend,
        )

        block = self._backend.lag_rows_core(
            np.ascontiguousarray(rows, dtype=dtype),
            self.lags,
            fill,
            pad,
            row_stride,
        )

        return LagMatrix(
            block.reshape(-1),
            row_count,
            row_stride,
            series_count=n_series,
            series_length=length,
            lags=self.lags,
        )


def _element_type(rows: np.ndarray, fill, pad) -> np.dtype:
    # Python scalars promote weakly; anything numpy cannot interpret ends up as object
    try:
        return np.result_type(rows, fill, pad)
    except TypeError:
        return np.result_type(rows, np.asarray(fill), np.asarray(pad))


def _cast(dtype: np.dtype, value, name: str):
    try:
        return dtype.type(value)
    except (OverflowError, TypeError, ValueError):
        raise InvalidConfiguration(f"{name} value {value!r} cannot be stored as {dtype}")


def lag_matrix(series, lags: Lags, fill, out_row_len: Optional[int] = None, pad=None,
               backend: Optional[str] = None) -> LagMatrix:
    """
    Create a time-lagged matrix of a single series.

    Parameters
    ----------
    series : array_like, shape (L,)
        Time series data.
    lags : int or iterable of int
        Highest lag, or the lag offsets to produce.
    fill : scalar
        Value used for lag positions without history.
    out_row_len : int, optional
        Row stride of the result, at least ``L``.
    pad : scalar, optional
        Value of the padding columns; defaults to ``fill``.
    backend : str, optional
        Computational backend.

    Returns
    -------
    LagMatrix

    Examples
    --------
    >>> m = lag_matrix([1.0, 2.0, 3.0, 4.0], 3, np.inf, out_row_len=5)
    >>> m.as_2d()[1]
    array([inf,  1.,  2.,  3., inf])
    """
    return LagMatrixBuilder(lags, fill, out_row_len, pad, backend).build(series)


def lag_matrix_2d(series, layout: MatrixLayout, lags: Lags, fill, out_row_len: Optional[int] = None,
                  pad=None, backend: Optional[str] = None) -> LagMatrix:
    """
    Create a time-lagged matrix of several series stored in one flat buffer.

    Rows of the result are grouped by lag level first: all series at lag 0,
    then all series at the next lag, and so on.

    Parameters
    ----------
    series : array_like, shape (S * L,)
        Flat buffer of ``S`` series.
    layout : MatrixLayout
        ``MatrixLayout.row_major(L)`` or ``MatrixLayout.column_major(L)``.
    lags : int or iterable of int
        Highest lag, or the lag offsets to produce.
    fill : scalar
        Value used for lag positions without history.
    out_row_len : int, optional
        Row stride of the result, at least ``L``.
    pad : scalar, optional
        Value of the padding columns; defaults to ``fill``.
    backend : str, optional
        Computational backend.

    Returns
    -------
    LagMatrix
    """
    return LagMatrixBuilder(lags, fill, out_row_len, pad, backend).build_2d(series, layout)
