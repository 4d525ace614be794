"""The poly type checker.

Types are inferred in the style of algorithm W, split into two phases as in
Stephen Diehl's "Write You a Haskell": a traversal of the expression generates
equality constraints, then unification solves them. Let-bound values are
generalized so that each use of a let-bound name can be typed separately.
"""

from __future__ import annotations

import dataclasses
from typing import List, Optional, Tuple

from poly.logging import get_logger
from poly.syntax import (
    ApplicationNode,
    ExpressionNode,
    FixNode,
    IfNode,
    LambdaNode,
    LetNode,
    ListNode,
    LiteralNode,
    PrimitiveNode,
    ProgramNode,
    VariableNode,
)
from poly.typecheck.constraints import Constraint
from poly.typecheck.env import Environment
from poly.typecheck.errors import (
    AmbiguousConstraintsError,
    InfiniteTypeError,
    InternalError,
    NameError,
    StaticAnalysisError,
    TypeError,
    UnhandledNodeTypeError,
    UnificationError,
    UnificationMismatchError,
)
from poly.typecheck.generalization import (
    close_over,
    generalize,
    instantiate,
    normalize,
)
from poly.typecheck.preamble_types import literal_type, primitive_type
from poly.typecheck.state import InferState
from poly.typecheck.substitutions import Substitutions, compose
from poly.typecheck.types import (
    ForAll,
    FunctionType,
    ListType,
    Type,
    bool_type,
)
from poly.typecheck.unification import solve, unify

_logger = get_logger(__name__)


def infer(
    env: Environment, state: InferState, expression: ExpressionNode
) -> Tuple[Type, List[Constraint]]:
    """Generate the type of expression and the constraints it must satisfy.

    The returned type is not solved: it becomes the principal type of the
    expression once the solution of the constraints is applied to it."""
    if isinstance(expression, LiteralNode):
        return literal_type(expression), []
    elif isinstance(expression, VariableNode):
        scheme = env.lookup(expression.name)
        if scheme is None:
            raise NameError(expression.name)
        return instantiate(state, scheme), []
    elif isinstance(expression, LambdaNode):
        parameter_type = state.fresh()
        body_env = env.extend(
            expression.parameter, ForAll([], parameter_type)
        )
        body_type, constraints = infer(body_env, state, expression.body)
        return FunctionType(parameter_type, body_type), constraints
    elif isinstance(expression, ApplicationNode):
        function_type, function_constraints = infer(
            env, state, expression.function
        )
        argument_type, argument_constraints = infer(
            env, state, expression.argument
        )
        result_type = state.fresh()
        return result_type, [
            *function_constraints,
            *argument_constraints,
            Constraint(
                function_type, FunctionType(argument_type, result_type)
            ),
        ]
    elif isinstance(expression, LetNode):
        value_type, value_constraints = infer(env, state, expression.value)
        sub = solve(value_constraints)
        solved_env = env.apply_substitution(sub)
        scheme = generalize(solved_env, value_type.apply_substitution(sub))
        _logger.debug('generalized {} to {}', expression.name, scheme)
        body_type, body_constraints = infer(
            solved_env.extend(expression.name, scheme), state, expression.body
        )
        # The value's constraints are solved again along with the body's so
        # that the outer solver sees variables shared with the context.
        return body_type, [*value_constraints, *body_constraints]
    elif isinstance(expression, IfNode):
        test_type, test_constraints = infer(env, state, expression.test)
        then_type, then_constraints = infer(env, state, expression.then)
        else_type, else_constraints = infer(env, state, expression.else_)
        return then_type, [
            *test_constraints,
            *then_constraints,
            *else_constraints,
            Constraint(test_type, bool_type),
            Constraint(then_type, else_type),
        ]
    elif isinstance(expression, FixNode):
        body_type, constraints = infer(env, state, expression.body)
        result_type = state.fresh()
        return result_type, [
            *constraints,
            Constraint(body_type, FunctionType(result_type, result_type)),
        ]
    elif isinstance(expression, ListNode):
        list_type = state.fresh()
        element_type = state.fresh()
        constraints = []
        for element in expression.elements:
            ty, element_constraints = infer(env, state, element)
            constraints += element_constraints
            constraints.append(Constraint(ty, element_type))
        constraints.append(Constraint(list_type, ListType(element_type)))
        return list_type, constraints
    elif isinstance(expression, PrimitiveNode):
        return primitive_type(state, expression.primitive), []
    raise UnhandledNodeTypeError(
        "don't know how to handle '{}'".format(expression)
    )


@dataclasses.dataclass(frozen=True)
class InferenceResult:
    """Everything inference found out about an expression.

    type is the solved but unnormalized type; scheme is the final result."""

    constraints: Tuple[Constraint, ...]
    substitution: Substitutions
    type: Type
    scheme: ForAll


def infer_with_details(
    expression: ExpressionNode, env: Optional[Environment] = None
) -> InferenceResult:
    env = Environment() if env is None else env
    state = InferState()
    ty, constraints = infer(env, state, expression)
    _logger.debug('generated {} constraints', len(constraints))
    sub = solve(constraints)
    _logger.debug('solution: {}', sub)
    solved_type = ty.apply_substitution(sub)
    return InferenceResult(
        tuple(constraints), sub, solved_type, close_over(solved_type)
    )


def infer_expression(
    expression: ExpressionNode, env: Optional[Environment] = None
) -> ForAll:
    """Infer the most general type scheme of expression."""
    return infer_with_details(expression, env).scheme


def infer_program(
    program: ProgramNode, env: Optional[Environment] = None
) -> Tuple[Environment, ForAll]:
    """Infer a whole program.

    Each definition is typed in an environment holding the definitions
    before it, but not itself. Returns the final environment and the scheme
    of the program's body."""
    env = Environment() if env is None else env
    for definition in program.definitions:
        scheme = infer_expression(definition.value, env)
        _logger.debug('{} : {}', definition.name, scheme)
        env = env.extend(definition.name, scheme)
    return env, infer_expression(program.body, env)


__all__ = [
    'AmbiguousConstraintsError',
    'Constraint',
    'Environment',
    'ForAll',
    'InferState',
    'InferenceResult',
    'InfiniteTypeError',
    'InternalError',
    'NameError',
    'StaticAnalysisError',
    'Substitutions',
    'TypeError',
    'UnhandledNodeTypeError',
    'UnificationError',
    'UnificationMismatchError',
    'close_over',
    'compose',
    'generalize',
    'infer',
    'infer_expression',
    'infer_program',
    'infer_with_details',
    'instantiate',
    'normalize',
    'solve',
    'unify',
]
