# --- Purpose: Owning, dense storage of a two-dimensional matrix. ---

import logging
import operator

from ._indexing import check_window, checked_offset, normalize_key
from .accessor import Accessor, Ordering
from .buffer import Buffer, Region
from .config import DEFAULT_DTYPE, DEFAULT_ORDER
from .errors import ReleasedBufferError
from .indexable import to_nested_list
from .view import MutableView, View

logger = logging.getLogger(__name__)


class Matrix:
    """
    Represents a matrix stored in one contiguous buffer.

    The buffer holds exactly nb_rows * nb_cols elements laid out in row-major
    or column-major order; every element access goes through the matrix's
    Accessor. Views borrow the same buffer with their own Accessor.
    """
    def __init__(self, nb_rows, nb_cols, order=DEFAULT_ORDER, dtype=DEFAULT_DTYPE, default=None):
        nb_rows = operator.index(nb_rows)
        nb_cols = operator.index(nb_cols)
        if nb_rows < 0 or nb_cols < 0:
            raise ValueError(f"Matrix dimensions must be non-negative, got ({nb_rows}, {nb_cols})")

        self._nb_rows = nb_rows
        self._nb_cols = nb_cols
        self._order = Ordering(order)
        self._accessor = Accessor.for_order(self._order, nb_rows, nb_cols)
        self._buffer = Buffer(nb_rows * nb_cols, dtype=dtype, default=default)
        logger.debug(f"Created {self!r}")

    @classmethod
    def new_row_major(cls, nb_rows, nb_cols, dtype=DEFAULT_DTYPE, default=None) -> "Matrix":
        return cls(nb_rows, nb_cols, Ordering.ROW_MAJOR, dtype=dtype, default=default)

    @classmethod
    def new_column_major(cls, nb_rows, nb_cols, dtype=DEFAULT_DTYPE, default=None) -> "Matrix":
        return cls(nb_rows, nb_cols, Ordering.COLUMN_MAJOR, dtype=dtype, default=default)

    @property
    def nb_rows(self) -> int:
        return self._nb_rows

    @property
    def nb_cols(self) -> int:
        return self._nb_cols

    @property
    def shape(self):
        return (self._nb_rows, self._nb_cols)

    @property
    def size(self) -> int:
        return self._buffer.size

    @property
    def dtype(self):
        return self._buffer.dtype

    @property
    def borrows(self):
        return self._buffer.borrows

    @property
    def is_released(self) -> bool:
        return not self._buffer.is_alive

    def order(self) -> Ordering:
        return self._order

    def _locate(self, key, write):
        row, col = normalize_key(key)
        data = self._buffer.data
        offset = checked_offset(self._accessor, row, col, self._nb_rows, self._nb_cols, len(data))
        self._buffer.borrows.check_access(None, row, col, write)
        return data, offset

    def __getitem__(self, key):
        data, offset = self._locate(key, write=False)
        return data[offset]

    def __setitem__(self, key, value):
        data, offset = self._locate(key, write=True)
        data[offset] = value

    def _derive(self, cls, start_row, start_col, nb_rows, nb_cols, exclusive):
        if not self._buffer.is_alive:
            raise ReleasedBufferError("Matrix buffer has been released")
        start_row, start_col, nb_rows, nb_cols = check_window(
            start_row, start_col, nb_rows, nb_cols, self._nb_rows, self._nb_cols)
        accessor = Accessor.new_with_offset(
            self._accessor.stride_row, self._accessor.stride_col, start_row, start_col)
        borrow = self._buffer.borrows.acquire(
            Region(start_row, start_col, nb_rows, nb_cols), exclusive)
        return cls(self._buffer, accessor, nb_rows, nb_cols, borrow, self)

    def view(self, start_row, start_col, nb_rows, nb_cols) -> View:
        """
        Read-only window over the sub-rectangle starting at (start_row, start_col).

        Raises:
            InvalidViewError: if the rectangle does not fit in the matrix
            BorrowError: if the rectangle overlaps a live mutable view
        """
        return self._derive(View, start_row, start_col, nb_rows, nb_cols, exclusive=False)

    def view_mut(self, start_row, start_col, nb_rows, nb_cols) -> MutableView:
        """
        Read-write window over the sub-rectangle starting at (start_row, start_col).

        Raises:
            InvalidViewError: if the rectangle does not fit in the matrix
            BorrowError: if the rectangle overlaps any live view
        """
        return self._derive(MutableView, start_row, start_col, nb_rows, nb_cols, exclusive=True)

    def full_view(self) -> View:
        return self.view(0, 0, self._nb_rows, self._nb_cols)

    def full_view_mut(self) -> MutableView:
        return self.view_mut(0, 0, self._nb_rows, self._nb_cols)

    def tolist(self):
        return to_nested_list(self)

    def release(self):
        """Explicitly frees the buffer. Views taken from this matrix fault afterwards."""
        self._buffer.release()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()

    def __repr__(self):
        return (f"Matrix(shape={self.shape}, order={self._order.value}, "
                f"dtype={self._buffer.dtype.name})")
