"""Substitution representation and operations."""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Iterable,
    Iterator,
    Mapping,
    Tuple,
    TypeVar,
    Union,
)

from typing_extensions import Protocol

# circular imports
if TYPE_CHECKING:
    from poly.typecheck.types import Type, TypeVariable


_Result = TypeVar('_Result', covariant=True)


class _Substitutable(Protocol[_Result]):
    def apply_substitution(self, sub: 'Substitutions') -> _Result:
        pass


class Substitutions(Mapping['TypeVariable', 'Type']):
    """Substitutions of type variables with types.

    Substitutions are immutable. Applying one replaces each variable in its
    domain by its image once; images are not themselves substituted again."""

    def __init__(
        self,
        sub: Union[
            Iterable[Tuple['TypeVariable', 'Type']],
            Mapping['TypeVariable', 'Type'],
            None,
        ] = None,
    ) -> None:
        self._sub = {} if sub is None else dict(sub)

    def __call__(self, arg: _Substitutable[_Result]) -> _Result:
        return arg.apply_substitution(self)

    def __getitem__(self, var: 'TypeVariable') -> 'Type':
        return self._sub[var]

    def __iter__(self) -> Iterator['TypeVariable']:
        return iter(self._sub)

    def __len__(self) -> int:
        return len(self._sub)

    def __bool__(self) -> bool:
        return bool(self._sub)

    def __str__(self) -> str:
        return '{' + ', '.join(f'{v}: {t}' for v, t in self.items()) + '}'

    def __repr__(self) -> str:
        return f'Substitutions({self._sub!r})'

    def without(
        self, variables: Iterable['TypeVariable']
    ) -> 'Substitutions':
        """Remove the given variables from the domain."""
        removed = set(variables)
        if not removed & self._sub.keys():
            return self
        return Substitutions(
            {v: t for v, t in self._sub.items() if v not in removed}
        )

    def apply_substitution(self, sub: 'Substitutions') -> 'Substitutions':
        """Compose so that the result behaves like self followed by sub."""
        return compose(sub, self)


def compose(s1: Substitutions, s2: Substitutions) -> Substitutions:
    """Compose two substitutions.

    s2 is applied first: for every type t,
    compose(s1, s2)(t) == s1(s2(t)). s1 is applied to the images of s2, and
    those entries win over the entries of s1 for variables both map."""
    return Substitutions(
        {**s1, **{v: t.apply_substitution(s1) for v, t in s2.items()}}
    )
