"""Solving equality constraints by unification."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from poly.logging import get_logger
from poly.typecheck.constraints import Constraint
from poly.typecheck.errors import (
    InfiniteTypeError,
    InternalError,
    UnificationError,
    UnificationMismatchError,
    format_unknown_type_error,
)
from poly.typecheck.substitutions import Substitutions, compose
from poly.typecheck.types import (
    FunctionType,
    ListType,
    PairType,
    Type,
    TypeConstant,
    TypeVariable,
)

_logger = get_logger(__name__)

_KNOWN_TYPES = (TypeVariable, TypeConstant, FunctionType, ListType, PairType)


def unify(t1: Type, t2: Type) -> Substitutions:
    """Find the most general substitution that makes t1 and t2 equal."""
    for ty in (t1, t2):
        if not isinstance(ty, _KNOWN_TYPES):
            raise InternalError(format_unknown_type_error(ty))
    if t1 == t2:
        return Substitutions()
    if isinstance(t1, TypeVariable):
        return bind(t1, t2)
    if isinstance(t2, TypeVariable):
        return bind(t2, t1)
    if isinstance(t1, FunctionType) and isinstance(t2, FunctionType):
        return unify_many(
            [t1.argument, t1.result], [t2.argument, t2.result]
        )
    if isinstance(t1, ListType) and isinstance(t2, ListType):
        return unify_many([t1.element], [t2.element])
    if isinstance(t1, PairType) and isinstance(t2, PairType):
        return unify_many([t1.first, t1.second], [t2.first, t2.second])
    raise UnificationError(t1, t2)


def unify_many(
    types1: Sequence[Type], types2: Sequence[Type]
) -> Substitutions:
    """Unify two sequences of types pairwise, left to right.

    Each result is applied to the rest of both sequences before they are
    unified."""
    if len(types1) != len(types2):
        raise UnificationMismatchError(types1, types2)
    if not types1:
        return Substitutions()
    first1, *rest1 = types1
    first2, *rest2 = types2
    sub1 = unify(first1, first2)
    sub2 = unify_many(
        [t.apply_substitution(sub1) for t in rest1],
        [t.apply_substitution(sub1) for t in rest2],
    )
    return compose(sub2, sub1)


def bind(variable: TypeVariable, ty: Type) -> Substitutions:
    if ty == variable:
        return Substitutions()
    # occurs check
    if variable in ty.free_type_variables():
        raise InfiniteTypeError(variable, ty)
    return Substitutions({variable: ty})


def solve(constraints: Iterable[Constraint]) -> Substitutions:
    """Solve constraints into one substitution.

    Constraints are taken from the end of the list. The solution of each one
    is applied to those still waiting, so later unifications see variables
    that are already resolved. The first constraint that cannot be solved
    raises its error."""
    pending: List[Constraint] = list(constraints)
    sub = Substitutions()
    while pending:
        left, right = pending.pop()
        _logger.debug('unifying {} with {}', left, right)
        new_sub = unify(left, right)
        pending = [c.apply_substitution(new_sub) for c in pending]
        sub = compose(new_sub, sub)
    return sub
