"""Time-lagged copies of time series data."""
import logging

from . import backends  # registers the kernels
from .backend import available_backends, register_backend, unregister_backend
from .errors import IndexOutOfBounds, InvalidConfiguration, LagError, ShapeMismatch
from .layout import MatrixLayout, Order
from .matrix import LagMatrix
from .lagging.builders import LagMatrixBuilder, lag_matrix, lag_matrix_2d
from .lagging.adapters import lag_frame, lag_matrix_from_array

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.5.0"

__all__ = [
    "IndexOutOfBounds",
    "InvalidConfiguration",
    "LagError",
    "LagMatrix",
    "LagMatrixBuilder",
    "MatrixLayout",
    "Order",
    "ShapeMismatch",
    "available_backends",
    "lag_frame",
    "lag_matrix",
    "lag_matrix_2d",
    "lag_matrix_from_array",
    "register_backend",
    "unregister_backend",
]
