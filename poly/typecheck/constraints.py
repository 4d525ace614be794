from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Tuple

if TYPE_CHECKING:
    from poly.typecheck.substitutions import Substitutions
    from poly.typecheck.types import Type


class Constraint:
    """An assertion that two types are equal."""

    def __init__(self, left: Type, right: Type) -> None:
        self._left = left
        self._right = right

    @property
    def left(self) -> Type:
        return self._left

    @property
    def right(self) -> Type:
        return self._right

    def apply_substitution(self, sub: Substitutions) -> Constraint:
        return Constraint(
            self._left.apply_substitution(sub),
            self._right.apply_substitution(sub),
        )

    def __iter__(self) -> Iterator[Type]:
        return iter(self._as_tuple())

    def __str__(self) -> str:
        return '{} ~ {}'.format(self._left, self._right)

    def __repr__(self) -> str:
        return 'Constraint({!r}, {!r})'.format(self._left, self._right)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constraint):
            return NotImplemented
        return self._as_tuple() == other._as_tuple()

    def __hash__(self) -> int:
        return hash(self._as_tuple())

    def _as_tuple(self) -> Tuple[Type, Type]:
        return self._left, self._right
