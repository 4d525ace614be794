"""Types of the values poly.eval produces.

A value is typed the way the expression that built it would be. A closure is
typed as its lambda, in an environment giving each captured value the scheme
of its own type."""

from __future__ import annotations

from typing import List, Optional, Tuple

from poly.eval import (
    BooleanValue,
    ClosureValue,
    IntegerValue,
    ListValue,
    PairValue,
    Value,
)
from poly.syntax import LambdaNode
from poly.typecheck import infer
from poly.typecheck.constraints import Constraint
from poly.typecheck.env import Environment
from poly.typecheck.errors import UnhandledNodeTypeError
from poly.typecheck.generalization import close_over
from poly.typecheck.state import InferState
from poly.typecheck.types import (
    ForAll,
    ListType,
    PairType,
    Type,
    bool_type,
    int_type,
)
from poly.typecheck.unification import solve


def infer_value(value: Value, state: Optional[InferState] = None) -> Type:
    """Infer the solved, unnormalized type of value."""
    state = InferState() if state is None else state
    ty, constraints = _infer_value(state, value)
    return ty.apply_substitution(solve(constraints))


def value_scheme(value: Value) -> ForAll:
    return close_over(infer_value(value))


def _infer_value(
    state: InferState, value: Value
) -> Tuple[Type, List[Constraint]]:
    if isinstance(value, IntegerValue):
        return int_type, []
    if isinstance(value, BooleanValue):
        return bool_type, []
    if isinstance(value, ListValue):
        list_type, element_type = state.fresh(), state.fresh()
        constraints: List[Constraint] = []
        for element in value.elements:
            ty, element_constraints = _infer_value(state, element)
            constraints += element_constraints
            constraints.append(Constraint(ty, element_type))
        constraints.append(Constraint(list_type, ListType(element_type)))
        return list_type, constraints
    if isinstance(value, PairValue):
        first, first_constraints = _infer_value(state, value.first)
        second, second_constraints = _infer_value(state, value.second)
        pair_type = state.fresh()
        return pair_type, [
            *first_constraints,
            *second_constraints,
            Constraint(pair_type, PairType(first, second)),
        ]
    if isinstance(value, ClosureValue):
        env = Environment(
            {name: value_scheme(v) for name, v in value.env.items()}
        )
        return infer(env, state, LambdaNode(value.parameter, value.body))
    raise UnhandledNodeTypeError(
        "don't know how to type the value '{}'".format(value)
    )
