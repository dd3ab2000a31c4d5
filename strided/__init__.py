"""Dense strided matrix storage with zero-copy, borrow-checked views."""

from .accessor import Accessor, Ordering
from .core import Matrix
from .errors import (
    BorrowError,
    IndexOutOfBoundsError,
    InvalidViewError,
    ReleasedBufferError,
    StridedError,
)
from .indexable import Indexable2D, MutableIndexable2D, iter_indices, to_nested_list
from .observability import configure_logging
from .view import MutableView, View

__version__ = "0.1.0"

__all__ = [
    'Accessor',
    'Ordering',
    'Matrix',
    'View',
    'MutableView',
    'Indexable2D',
    'MutableIndexable2D',
    'iter_indices',
    'to_nested_list',
    'configure_logging',
    'StridedError',
    'IndexOutOfBoundsError',
    'InvalidViewError',
    'BorrowError',
    'ReleasedBufferError',
]
