from functools import partial
from typing import Tuple

import jax
import jax.numpy as jnp
import numpy as np

from ...errors import InvalidConfiguration


@partial(jax.jit, static_argnames=("lags", "row_stride"))
def _lag_rows_core(series: jnp.ndarray, lags: Tuple[int, ...], fill, pad, row_stride: int) -> jnp.ndarray:
    """
    Build the lagged rows of a batch of series with JAX.

    The lag set and the row stride are static, every distinct combination
    compiles its own kernel.

    Parameters
    ----------
    series : jnp.ndarray, shape (S, L)
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
    jnp.ndarray, shape (len(lags) * S, row_stride)
    """
    n_series, length = series.shape
    fill = jnp.asarray(fill, dtype=series.dtype)
    pad = jnp.asarray(pad, dtype=series.dtype)

    if not lags:
        return jnp.empty((0, row_stride), dtype=series.dtype)

    cols = jnp.arange(row_stride)
    in_series = cols < length

    if length == 0:
        block = jnp.full((n_series, row_stride), pad, dtype=series.dtype)
        return jnp.concatenate([block] * len(lags), axis=0)

    blocks = []
    for lag in lags:
        source = cols - lag
        gathered = series[:, jnp.clip(source, 0, length - 1)]
        block = jnp.where(source >= 0, gathered, fill)
        blocks.append(jnp.where(in_series, block, pad))

    return jnp.concatenate(blocks, axis=0)


def lag_rows(series, lags, fill, pad, row_stride):
    """Run the jitted kernel and hand the result back as a NumPy array."""
    if series.dtype.kind == "O":
        raise InvalidConfiguration("The jax backend cannot lag object arrays, use backend='numpy'")

    values = jnp.asarray(series)
    if values.dtype != series.dtype:
        raise InvalidConfiguration(
            f"The jax backend would narrow {series.dtype} to {values.dtype}; "
            "enable 'jax_enable_x64' or pass data jax supports natively"
        )

    result = _lag_rows_core(values, tuple(lags), fill, pad, row_stride)
    return np.asarray(result)
