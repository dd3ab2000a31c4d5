"""
"Two-dimensional indexable with a known extent" capability.

Matrix, View and MutableView all answer to this contract without sharing a
base class, so code that only reads or writes elements should accept the
protocol rather than a concrete type.
"""

from typing import Any, Iterator, List, Protocol, Tuple, runtime_checkable


@runtime_checkable
class Indexable2D(Protocol):
    @property
    def nb_rows(self) -> int: ...

    @property
    def nb_cols(self) -> int: ...

    def __getitem__(self, key: Tuple[int, int]) -> Any: ...


@runtime_checkable
class MutableIndexable2D(Indexable2D, Protocol):
    def __setitem__(self, key: Tuple[int, int], value: Any) -> None: ...


def iter_indices(source: Indexable2D) -> Iterator[Tuple[int, int]]:
    """Yields every in-bounds (row, col) of `source`, row by row."""
    for row in range(source.nb_rows):
        for col in range(source.nb_cols):
            yield row, col


def to_nested_list(source: Indexable2D) -> List[List[Any]]:
    """Reads `source` into a list of rows."""
    return [[source[row, col] for col in range(source.nb_cols)]
            for row in range(source.nb_rows)]
