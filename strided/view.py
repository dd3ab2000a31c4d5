# --- Purpose: Non-owning windows into a matrix buffer. ---

import weakref

from ._indexing import check_window, checked_offset, normalize_key
from .accessor import Accessor
from .buffer import Borrow, Buffer, Region
from .errors import BorrowError
from .indexable import to_nested_list


class _BorrowedWindow:
    """
    State and read access shared by View and MutableView.

    A window holds the buffer handle, its own accessor and extent, and the
    borrow that keeps its region reserved. `source` (the matrix or parent view)
    is referenced so it stays reachable while the window is.
    """
    def __init__(self, buffer: Buffer, accessor: Accessor, nb_rows: int, nb_cols: int,
                 borrow: Borrow, source):
        self._buffer = buffer
        self._accessor = accessor
        self._nb_rows = nb_rows
        self._nb_cols = nb_cols
        self._borrow = borrow
        self._source = source
        # Ends the borrow when the window is collected without an explicit release.
        self._finalizer = weakref.finalize(self, buffer.borrows.release, borrow)

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
    def dtype(self):
        return self._buffer.dtype

    @property
    def origin(self):
        """Top-left corner of this window in the owning matrix."""
        return (self._borrow.region.row, self._borrow.region.col)

    @property
    def is_released(self) -> bool:
        return not self._borrow.alive

    def _ensure_live(self):
        data = self._buffer.data  # raises ReleasedBufferError first
        if not self._borrow.alive:
            raise BorrowError(f"{type(self).__name__} has been released")
        return data

    def _locate(self, key, write):
        row, col = normalize_key(key)
        data = self._ensure_live()
        offset = checked_offset(self._accessor, row, col, self._nb_rows, self._nb_cols, len(data))
        region = self._borrow.region
        self._buffer.borrows.check_access(self._borrow, region.row + row, region.col + col, write)
        return data, offset

    def __getitem__(self, key):
        data, offset = self._locate(key, write=False)
        return data[offset]

    def _derive(self, cls, start_row, start_col, nb_rows, nb_cols, exclusive):
        self._ensure_live()
        start_row, start_col, nb_rows, nb_cols = check_window(
            start_row, start_col, nb_rows, nb_cols, self._nb_rows, self._nb_cols)
        region = Region(self._borrow.region.row + start_row,
                        self._borrow.region.col + start_col, nb_rows, nb_cols)
        borrow = self._buffer.borrows.acquire(region, exclusive, parent=self._borrow)
        return cls(self._buffer, self._accessor.shifted(start_row, start_col),
                   nb_rows, nb_cols, borrow, self)

    def view(self, start_row, start_col, nb_rows, nb_cols) -> "View":
        """Read-only sub-window, indices relative to this window."""
        return self._derive(View, start_row, start_col, nb_rows, nb_cols, exclusive=False)

    def full_view(self) -> "View":
        return self.view(0, 0, self._nb_rows, self._nb_cols)

    def tolist(self):
        return to_nested_list(self)

    def release(self):
        """Ends the borrow; the window (and anything derived from it) is unusable afterwards."""
        self._finalizer()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()

    def __repr__(self):
        state = ", released" if self.is_released else ""
        return f"{type(self).__name__}(shape={self.shape}, origin={self.origin}{state})"


class View(_BorrowedWindow):
    """Read-only window. Any number of views may share a region."""


class MutableView(_BorrowedWindow):
    """
    Read-write window with exclusive use of its region.

    While a sub-window derived from it is live, the MutableView itself cannot
    write the lent region (nor read it, if the sub-window is mutable).
    """
    def __setitem__(self, key, value):
        data, offset = self._locate(key, write=True)
        data[offset] = value

    def view_mut(self, start_row, start_col, nb_rows, nb_cols) -> "MutableView":
        return self._derive(MutableView, start_row, start_col, nb_rows, nb_cols, exclusive=True)

    def full_view_mut(self) -> "MutableView":
        return self.view_mut(0, 0, self._nb_rows, self._nb_cols)
