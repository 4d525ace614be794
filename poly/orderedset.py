from typing import AbstractSet, Iterable, Iterator, TypeVar

_T = TypeVar('_T', covariant=True)


class InsertionOrderedSet(AbstractSet[_T]):
    """A set that iterates in the order its elements were first added.

    Set operations inherited from AbstractSet keep the order of the left
    operand, followed by new elements of the right operand."""

    def __init__(self, elements: Iterable[_T] = ()) -> None:
        super().__init__()
        self._data = dict.fromkeys(elements)

    @classmethod
    def _from_iterable(
        cls, elements: Iterable[_T]
    ) -> 'InsertionOrderedSet[_T]':
        return cls(elements)

    def __contains__(self, element: object) -> bool:
        return element in self._data

    def __iter__(self) -> Iterator[_T]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f'{type(self).__qualname__}({list(self._data)!r})'
