from __future__ import annotations
import builtins
from typing import TYPE_CHECKING, Sequence


if TYPE_CHECKING:
    from poly.typecheck.constraints import Constraint
    from poly.typecheck.types import ForAll, Type, TypeVariable


class StaticAnalysisError(Exception):
    """Base class of every error poly reports about a user's program.

    The subclasses form a closed set: UnificationError, InfiniteTypeError,
    NameError, AmbiguousConstraintsError and UnificationMismatchError."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class TypeError(StaticAnalysisError, builtins.TypeError):
    """Type errors raised by the poly type checker."""


class UnificationError(TypeError):
    def __init__(self, left: Type, right: Type) -> None:
        super().__init__(format_unification_error(left, right))
        self.left = left
        self.right = right

    def __repr__(self) -> str:
        return f'UnificationError({self.left!r}, {self.right!r})'


class InfiniteTypeError(TypeError):
    def __init__(self, variable: TypeVariable, type: Type) -> None:
        super().__init__(format_occurs_error(variable, type))
        self.variable = variable
        self.type = type

    def __repr__(self) -> str:
        return f'InfiniteTypeError({self.variable!r}, {self.type!r})'


class UnificationMismatchError(TypeError):
    def __init__(self, lefts: Sequence[Type], rights: Sequence[Type]) -> None:
        super().__init__(format_unification_mismatch_error(lefts, rights))
        self.lefts = tuple(lefts)
        self.rights = tuple(rights)


class AmbiguousConstraintsError(TypeError):
    """Reserved for constraints left unsolved after solving.

    Nothing raises this yet."""

    def __init__(self, constraints: Sequence[Constraint]) -> None:
        super().__init__(format_ambiguous_constraints_error(constraints))
        self.constraints = tuple(constraints)


class NameError(StaticAnalysisError, builtins.NameError):
    def __init__(self, name: str) -> None:
        super().__init__(f'name {name!r} not previously defined')
        self.name = name

    def __repr__(self) -> str:
        return f'NameError({self.name!r})'


class UnhandledNodeTypeError(builtins.NotImplementedError):
    pass


class InternalError(builtins.RuntimeError):
    """An invariant of the type checker was broken. This is a bug in poly."""


def format_unification_error(left: Type, right: Type) -> str:
    return f'cannot unify {left} with {right}'


def format_occurs_error(v: TypeVariable, ty: Type) -> str:
    return (
        f'{v} cannot be bound to {ty} because it would form an infinite '
        'type'
    )


def format_unification_mismatch_error(
    lefts: Sequence[Type], rights: Sequence[Type]
) -> str:
    return (
        f'cannot unify {len(lefts)} types ({", ".join(map(str, lefts))}) '
        f'with {len(rights)} types ({", ".join(map(str, rights))})'
    )


def format_ambiguous_constraints_error(
    constraints: Sequence[Constraint],
) -> str:
    return f'ambiguous constraints: {", ".join(map(str, constraints))}'


def format_missing_quantified_variable_error(
    scheme: ForAll, variable: TypeVariable
) -> str:
    return f'{variable} does not occur in the body of {scheme}'


def format_unquantified_variable_error(
    scheme: ForAll, variable: TypeVariable
) -> str:
    return f'{variable} is not in the signature of {scheme}'


def format_unknown_type_error(ty: object) -> str:
    return f'{ty!r} is not a type the solver knows how to unify'
