"""Bounds and window checks shared by Matrix, View and MutableView."""

import operator

from .errors import IndexOutOfBoundsError, InvalidViewError


def normalize_key(key):
    """Turn a subscript into a (row, col) pair of Python ints."""
    if not isinstance(key, tuple) or len(key) != 2:
        raise TypeError(f"Matrix indices must be a (row, col) pair, got {key!r}")
    return operator.index(key[0]), operator.index(key[1])


def checked_offset(accessor, row, col, nb_rows, nb_cols, buffer_len):
    """
    Validate (row, col) against the logical extent, then map it through the
    accessor and validate the resulting offset against the buffer length.

    Both checks should agree for a well-formed accessor; the second one keeps
    a malformed accessor from reaching memory outside the buffer.
    """
    if not (0 <= row < nb_rows and 0 <= col < nb_cols):
        raise IndexOutOfBoundsError(row, col, nb_rows, nb_cols)
    offset = accessor.index(row, col)
    if offset >= buffer_len:
        raise IndexOutOfBoundsError(row, col, nb_rows, nb_cols,
                                    offset=offset, buffer_len=buffer_len)
    return offset


def check_window(start_row, start_col, nb_rows, nb_cols, source_rows, source_cols):
    """Validate a sub-rectangle request against the shape of its source."""
    window = tuple(operator.index(v) for v in (start_row, start_col, nb_rows, nb_cols))
    if any(v < 0 for v in window):
        raise InvalidViewError(f"View parameters must be non-negative, got {window}")
    start_row, start_col, nb_rows, nb_cols = window
    if start_row + nb_rows > source_rows or start_col + nb_cols > source_cols:
        raise InvalidViewError(
            f"View of shape ({nb_rows}, {nb_cols}) at ({start_row}, {start_col}) "
            f"exceeds source shape ({source_rows}, {source_cols})"
        )
    return window
