"""Typing environments."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from functools import reduce
from operator import or_
from typing import TYPE_CHECKING, Optional

from poly.orderedset import InsertionOrderedSet

if TYPE_CHECKING:
    # type only
    from poly.typecheck.substitutions import Substitutions

    # circular imports
    from poly.typecheck.types import ForAll, TypeVariable


class Environment(Mapping[str, 'ForAll']):
    """A map from names in a typing context to the type schemes of those names.

    Environments are never changed in place. extend and apply_substitution
    return new environments."""

    def __init__(self, env: Optional[Mapping[str, ForAll]] = None) -> None:
        self._env = dict(env or {})

    def lookup(self, name: str) -> Optional[ForAll]:
        return self._env.get(name)

    def extend(self, name: str, scheme: ForAll) -> Environment:
        return Environment({**self._env, name: scheme})

    def apply_substitution(self, sub: Substitutions) -> Environment:
        if not sub:
            return self
        return Environment(
            {name: s.apply_substitution(sub) for name, s in self.items()}
        )

    def free_type_variables(self) -> InsertionOrderedSet[TypeVariable]:
        return reduce(
            or_,
            map(lambda s: s.free_type_variables(), self.values()),
            InsertionOrderedSet([]),
        )

    def __getitem__(self, name: str) -> ForAll:
        return self._env[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._env)

    def __len__(self) -> int:
        return len(self._env)

    def __str__(self) -> str:
        return '{' + ', '.join(f'{n}: {s}' for n, s in self.items()) + '}'

    def __repr__(self) -> str:
        return f'Environment({self._env!r})'
