# --- Purpose: Maps logical (row, col) indices to offsets in a flat buffer. ---

import enum
from dataclasses import dataclass


class Ordering(enum.Enum):
    """Matrix layout inside its contiguous buffer."""
    ROW_MAJOR = "row_major"
    COLUMN_MAJOR = "column_major"


@dataclass(frozen=True)
class Accessor:
    """
    Stride and offset value that turns matrix indexes (row, col) into the
    location of the element in the flat buffer.

    The offset is non-zero when the accessor describes a window that starts
    somewhere other than (0, 0) of its source.
    """
    stride_row: int
    stride_col: int
    offset: int = 0

    def __post_init__(self):
        if self.stride_row < 0 or self.stride_col < 0 or self.offset < 0:
            raise ValueError(
                f"Strides and offset must be non-negative, got "
                f"stride_row={self.stride_row}, stride_col={self.stride_col}, offset={self.offset}"
            )

    @classmethod
    def new(cls, stride_row: int, stride_col: int) -> "Accessor":
        return cls(stride_row, stride_col, 0)

    @classmethod
    def new_with_offset(cls, stride_row: int, stride_col: int,
                        origin_row: int, origin_col: int) -> "Accessor":
        """Accessor whose (0, 0) lands on (origin_row, origin_col) of the source."""
        offset = stride_row * origin_row + stride_col * origin_col
        return cls(stride_row, stride_col, offset)

    @classmethod
    def for_order(cls, order: Ordering, nb_rows: int, nb_cols: int) -> "Accessor":
        """
        Derive the strides of a dense nb_rows x nb_cols matrix.

        Row-major stores rows one after the other (stride_row = nb_cols),
        column-major stores columns one after the other (stride_col = nb_rows).
        """
        order = Ordering(order)
        if order is Ordering.ROW_MAJOR:
            return cls.new(nb_cols, 1)
        return cls.new(1, nb_rows)

    def shifted(self, origin_row: int, origin_col: int) -> "Accessor":
        """Same strides, origin moved by (origin_row, origin_col) logical steps."""
        offset = self.offset + self.stride_row * origin_row + self.stride_col * origin_col
        return Accessor(self.stride_row, self.stride_col, offset)

    def index(self, row: int, col: int) -> int:
        # No range checking here, callers validate against their own extent.
        return row * self.stride_row + col * self.stride_col + self.offset
