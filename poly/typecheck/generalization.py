"""Let-polymorphism: generalizing types into schemes and back again."""

from __future__ import annotations

import itertools
import string
from typing import Dict, Iterator

from poly.typecheck.env import Environment
from poly.typecheck.errors import (
    InternalError,
    format_missing_quantified_variable_error,
    format_unquantified_variable_error,
)
from poly.typecheck.state import InferState
from poly.typecheck.substitutions import Substitutions
from poly.typecheck.types import (
    ForAll,
    FunctionType,
    ListType,
    PairType,
    Type,
    TypeConstant,
    TypeVariable,
)


def generalize(env: Environment, ty: Type) -> ForAll:
    """Quantify over the free variables of ty that are not free in env."""
    env_variables = env.free_type_variables()
    return ForAll(
        [v for v in ty.free_type_variables() if v not in env_variables], ty
    )


def instantiate(state: InferState, scheme: ForAll) -> Type:
    """Replace each quantified variable of scheme with a fresh variable."""
    fresh = Substitutions({v: state.fresh() for v in scheme.variables})
    return scheme.body.apply_substitution(fresh)


def close_over(ty: Type) -> ForAll:
    """Generalize ty over all of its variables and normalize the result."""
    return normalize(generalize(Environment(), ty))


def normalize(scheme: ForAll) -> ForAll:
    """Rename the variables of a closed scheme to a, b, c, ...

    Variables are renamed in the order they first occur in the body, so
    alpha-equivalent schemes normalize to the same scheme."""
    quantified = set(scheme.variables)
    order = [
        v for v in scheme.body.free_type_variables() if v in quantified
    ]
    for variable in scheme.variables:
        if variable not in order:
            raise InternalError(
                format_missing_quantified_variable_error(scheme, variable)
            )
    renaming: Dict[TypeVariable, TypeVariable] = dict(
        zip(order, map(TypeVariable, _letters()))
    )

    def rename(ty: Type) -> Type:
        if isinstance(ty, TypeVariable):
            if ty not in renaming:
                raise InternalError(
                    format_unquantified_variable_error(scheme, ty)
                )
            return renaming[ty]
        if isinstance(ty, TypeConstant):
            return ty
        if isinstance(ty, FunctionType):
            return FunctionType(rename(ty.argument), rename(ty.result))
        if isinstance(ty, ListType):
            return ListType(rename(ty.element))
        if isinstance(ty, PairType):
            return PairType(rename(ty.first), rename(ty.second))
        raise InternalError(f'{ty!r} cannot be normalized')

    return ForAll(renaming.values(), rename(scheme.body))


def _letters() -> Iterator[str]:
    """Yield a, b, ..., z, aa, ab, ..., az, ba, ..."""
    for length in itertools.count(1):
        for letters in itertools.product(
            string.ascii_lowercase, repeat=length
        ):
            yield ''.join(letters)
