from dataclasses import dataclass
from enum import Enum

from .errors import ShapeMismatch


class Order(str, Enum):
    """How several series share one flat buffer."""
    ROW_MAJOR = "row_major"
    COLUMN_MAJOR = "column_major"


@dataclass(frozen=True)
class MatrixLayout:
    """
    Layout of a flat buffer holding several series of equal length.

    Parameters
    ----------
    order : Order
        ``ROW_MAJOR`` if each series is a contiguous run of ``width`` values,
        ``COLUMN_MAJOR`` if the buffer holds ``width`` rows and each series is
        one column, i.e. series ``s`` lives at ``s, s + S, s + 2S, ...``.
    width : int
        Number of observations per series.
    """
    order: Order
    width: int

    @classmethod
    def row_major(cls, width: int) -> 'MatrixLayout':
        return cls(Order.ROW_MAJOR, width)

    @classmethod
    def column_major(cls, width: int) -> 'MatrixLayout':
        return cls(Order.COLUMN_MAJOR, width)

    @property
    def is_row_major(self) -> bool:
        return self.order is Order.ROW_MAJOR

    def series_count(self, size: int) -> int:
        """
        Number of series packed into a buffer of ``size`` values.

        Raises
        ------
        ShapeMismatch
            If the width is not positive or does not divide ``size``.
        """
        if self.width <= 0:
            raise ShapeMismatch(f"Layout width must be positive, got {self.width}")
        count, remainder = divmod(size, self.width)
        if remainder:
            raise ShapeMismatch(
                f"Buffer of {size} values cannot be split into series of width {self.width}"
            )
        return count
