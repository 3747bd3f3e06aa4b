# timelag/backends/__init__.py
from ..backend import register_backend

from .core_numpy import _lag_rows_core as _numpy_lag_rows_core

# Register NumPy backend
register_backend("numpy", {
    "lag_rows_core": _numpy_lag_rows_core,
})

from .numba.lagging import lag_rows as _numba_lag_rows

# Register numba backend
register_backend("numba", {
    "lag_rows_core": _numba_lag_rows,
})

from .jax.lagging import lag_rows as _jax_lag_rows

# Register JAX backend
register_backend("jax", {
    "lag_rows_core": _jax_lag_rows,
})
