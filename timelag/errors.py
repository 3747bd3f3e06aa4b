class LagError(Exception):
    """Base class for all errors raised while building or reading a lag matrix."""


class InvalidConfiguration(LagError, ValueError):
    """
    Raised when the requested lags or row stride cannot be honoured,
    e.g. a row stride shorter than the series it has to hold.
    """


class ShapeMismatch(LagError, ValueError):
    """
    Raised when a buffer length does not agree with the declared layout
    or with the shape it is supposed to carry.
    """


class IndexOutOfBounds(LagError, IndexError):
    """Raised when a (row, col) lookup falls outside a finished lag matrix."""
