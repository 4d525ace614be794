"""Monotypes and type schemes."""

from __future__ import annotations

import abc
import functools
from typing import TYPE_CHECKING, Iterable, Tuple

from poly.orderedset import InsertionOrderedSet

if TYPE_CHECKING:
    from poly.typecheck.substitutions import Substitutions


class Type(abc.ABC):
    """A monotype.

    Types are immutable trees compared structurally. Substitution builds new
    trees instead of changing existing ones."""

    @abc.abstractmethod
    def apply_substitution(self, sub: Substitutions) -> Type:
        pass

    @abc.abstractmethod
    def free_type_variables(self) -> InsertionOrderedSet[TypeVariable]:
        pass

    @abc.abstractmethod
    def _as_tuple(self) -> tuple:
        pass

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Type):
            return NotImplemented
        return type(self) is type(other) and (
            self._as_tuple() == other._as_tuple()
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._as_tuple()))

    def __repr__(self) -> str:
        arguments = ', '.join(map(repr, self._as_tuple()))
        return f'{type(self).__name__}({arguments})'


class TypeVariable(Type):
    def __init__(self, name: str) -> None:
        super().__init__()
        self.name = name

    def apply_substitution(self, sub: Substitutions) -> Type:
        return sub.get(self, self)

    def free_type_variables(self) -> InsertionOrderedSet[TypeVariable]:
        return InsertionOrderedSet([self])

    def _as_tuple(self) -> Tuple[str]:
        return (self.name,)

    def __str__(self) -> str:
        return self.name


class TypeConstant(Type):
    """A named base type such as Int or Bool."""

    def __init__(self, name: str) -> None:
        super().__init__()
        self.name = name

    def apply_substitution(self, sub: Substitutions) -> TypeConstant:
        return self

    def free_type_variables(self) -> InsertionOrderedSet[TypeVariable]:
        return InsertionOrderedSet()

    def _as_tuple(self) -> Tuple[str]:
        return (self.name,)

    def __str__(self) -> str:
        return self.name


class FunctionType(Type):
    def __init__(self, argument: Type, result: Type) -> None:
        super().__init__()
        self.argument = argument
        self.result = result

    def apply_substitution(self, sub: Substitutions) -> FunctionType:
        return FunctionType(
            self.argument.apply_substitution(sub),
            self.result.apply_substitution(sub),
        )

    def free_type_variables(self) -> InsertionOrderedSet[TypeVariable]:
        return (
            self.argument.free_type_variables()
            | self.result.free_type_variables()
        )

    def _as_tuple(self) -> Tuple[Type, Type]:
        return self.argument, self.result

    def __str__(self) -> str:
        argument = str(self.argument)
        # arrows associate to the right
        if isinstance(self.argument, FunctionType):
            argument = f'({argument})'
        return f'{argument} -> {self.result}'


class ListType(Type):
    def __init__(self, element: Type) -> None:
        super().__init__()
        self.element = element

    def apply_substitution(self, sub: Substitutions) -> ListType:
        return ListType(self.element.apply_substitution(sub))

    def free_type_variables(self) -> InsertionOrderedSet[TypeVariable]:
        return self.element.free_type_variables()

    def _as_tuple(self) -> Tuple[Type]:
        return (self.element,)

    def __str__(self) -> str:
        return f'[{self.element}]'


class PairType(Type):
    def __init__(self, first: Type, second: Type) -> None:
        super().__init__()
        self.first = first
        self.second = second

    def apply_substitution(self, sub: Substitutions) -> PairType:
        return PairType(
            self.first.apply_substitution(sub),
            self.second.apply_substitution(sub),
        )

    def free_type_variables(self) -> InsertionOrderedSet[TypeVariable]:
        return (
            self.first.free_type_variables()
            | self.second.free_type_variables()
        )

    def _as_tuple(self) -> Tuple[Type, Type]:
        return self.first, self.second

    def __str__(self) -> str:
        return f'({self.first}, {self.second})'


class ForAll:
    """A type scheme: a body universally quantified over some variables.

    Every quantified variable is expected to occur in the body. That is true
    of schemes made by generalization and is not checked here."""

    def __init__(
        self, variables: Iterable[TypeVariable], body: Type
    ) -> None:
        self.variables = tuple(variables)
        self.body = body

    def apply_substitution(self, sub: Substitutions) -> ForAll:
        # quantified variables are bound here, so the substitution must not
        # reach them
        return ForAll(
            self.variables,
            self.body.apply_substitution(sub.without(self.variables)),
        )

    def free_type_variables(self) -> InsertionOrderedSet[TypeVariable]:
        return self.body.free_type_variables() - set(self.variables)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ForAll):
            return NotImplemented
        return (self.variables, self.body) == (other.variables, other.body)

    def __hash__(self) -> int:
        return hash((self.variables, self.body))

    def __str__(self) -> str:
        if not self.variables:
            return str(self.body)
        variables = ' '.join(map(str, self.variables))
        return f'forall {variables}. {self.body}'

    def __repr__(self) -> str:
        return f'ForAll({list(self.variables)!r}, {self.body!r})'


def function_type(*types: Type) -> Type:
    """Build the curried function type t1 -> t2 -> ... -> tn."""
    if not types:
        raise ValueError('a function type needs at least one type')
    return functools.reduce(
        lambda result, argument: FunctionType(argument, result),
        reversed(types[:-1]),
        types[-1],
    )


int_type = TypeConstant('Int')
bool_type = TypeConstant('Bool')
