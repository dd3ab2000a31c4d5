"""
Exceptions raised by the strided matrix library.

All of these are programmer-contract violations: they are raised immediately
at the offending call and never retried internally.
"""


class StridedError(Exception):
    """Base class for every error raised by this package."""


class IndexOutOfBoundsError(StridedError, IndexError):
    """An element access fell outside the logical extent or the buffer."""

    def __init__(self, row, col, nb_rows, nb_cols, offset=None, buffer_len=None):
        self.row = row
        self.col = col
        self.nb_rows = nb_rows
        self.nb_cols = nb_cols
        self.offset = offset
        self.buffer_len = buffer_len
        if offset is None:
            message = f"Index ({row}, {col}) out of bounds for shape ({nb_rows}, {nb_cols})"
        else:
            message = (f"Index ({row}, {col}) maps to offset {offset}, "
                       f"outside a buffer of {buffer_len} elements")
        super().__init__(message)


class InvalidViewError(StridedError, ValueError):
    """A sub-rectangle request does not fit inside its source."""


class BorrowError(StridedError, RuntimeError):
    """An access or derivation would alias a region that is lent out."""


class ReleasedBufferError(BorrowError):
    """The owning buffer has already been released."""
