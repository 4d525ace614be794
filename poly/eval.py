"""An evaluator for poly expressions.

Evaluation is strict. A lambda evaluates to a closure that holds the values
of its free variables. A primitive applied to all of its arguments is
interpreted directly; a primitive used any other way is first wrapped in one
closure per argument."""

from __future__ import annotations

import abc
import dataclasses
import operator
from typing import (
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Set,
    Tuple,
    Type,
    TypeVar,
)

from poly.logging import get_logger
from poly.syntax import (
    ApplicationNode,
    BooleanNode,
    ExpressionNode,
    FixNode,
    IfNode,
    IntegerNode,
    LambdaNode,
    LetNode,
    ListNode,
    Primitive,
    PrimitiveNode,
    ProgramNode,
    VariableNode,
    application,
)
from poly.typecheck.errors import UnhandledNodeTypeError

_logger = get_logger(__name__)


class Value(abc.ABC):
    """The result of evaluating an expression."""


@dataclasses.dataclass(frozen=True)
class IntegerValue(Value):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclasses.dataclass(frozen=True)
class BooleanValue(Value):
    value: bool

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclasses.dataclass(frozen=True)
class ListValue(Value):
    elements: Tuple[Value, ...]

    def __init__(self, elements: Iterable[Value]) -> None:
        object.__setattr__(self, 'elements', tuple(elements))

    def __str__(self) -> str:
        return '[' + ' '.join(map(str, self.elements)) + ']'


@dataclasses.dataclass(frozen=True)
class PairValue(Value):
    first: Value
    second: Value

    def __str__(self) -> str:
        return '(pair {} {})'.format(self.first, self.second)


@dataclasses.dataclass(frozen=True, eq=False)
class ClosureValue(Value):
    """A function value: a parameter, a body and the values the body uses.

    Closures compare by identity."""

    parameter: str
    body: ExpressionNode
    env: Mapping[str, Value]

    def __str__(self) -> str:
        return '<<closure>>'


class EvaluationError(Exception):
    """A failure while running a program.

    Programs that type check only fail this way when they do not terminate
    or when fix is given a function that uses its argument as a value."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class EvalState:
    """The supply of fresh parameter names for wrapped primitives.

    The names start with '#', which never appears in a parsed name."""

    def __init__(self, count: int = 0) -> None:
        self.count = count

    def fresh(self) -> str:
        self.count += 1
        return f'#{self.count}'

    def __repr__(self) -> str:
        return f'EvalState({self.count!r})'


def evaluate(
    expression: ExpressionNode, env: Optional[Mapping[str, Value]] = None
) -> Value:
    """Evaluate expression in an environment of values."""
    env = {} if env is None else env
    try:
        return _evaluate(env, EvalState(), expression)
    except RecursionError as e:
        raise EvaluationError('evaluation nested too deeply') from e


def evaluate_program(
    program: ProgramNode, env: Optional[Mapping[str, Value]] = None
) -> Tuple[Dict[str, Value], Value]:
    """Evaluate each definition of program, then its body.

    Returns the values of the definitions and the value of the body."""
    values = dict(env or {})
    for definition in program.definitions:
        values[definition.name] = evaluate(definition.value, values)
        _logger.debug('{} = {}', definition.name, values[definition.name])
    return values, evaluate(program.body, values)


def _evaluate(
    env: Mapping[str, Value], state: EvalState, expression: ExpressionNode
) -> Value:
    found = _find_primitive_application(expression)
    if found is not None:
        primitive, arguments = found
        values = [_evaluate(env, state, a) for a in arguments]
        result = _apply_primitive(state, primitive, values[: primitive.arity])
        for extra in values[primitive.arity :]:
            result = _apply(state, result, extra)
        return result
    if isinstance(expression, IntegerNode):
        return IntegerValue(expression.value)
    if isinstance(expression, BooleanNode):
        return BooleanValue(expression.value)
    if isinstance(expression, VariableNode):
        if expression.name not in env:
            raise EvaluationError(
                "name '{}' has no value".format(expression.name)
            )
        return env[expression.name]
    if isinstance(expression, LambdaNode):
        return _closure(expression.parameter, expression.body, env)
    if isinstance(expression, LetNode):
        value = _evaluate(env, state, expression.value)
        return _evaluate(
            {**env, expression.name: value}, state, expression.body
        )
    if isinstance(expression, IfNode):
        test = _evaluate(env, state, expression.test)
        if not isinstance(test, BooleanValue):
            raise EvaluationError(
                'the test of if evaluated to {}'.format(test)
            )
        branch = expression.then if test.value else expression.else_
        return _evaluate(env, state, branch)
    if isinstance(expression, ListNode):
        return ListValue(
            _evaluate(env, state, e) for e in expression.elements
        )
    if isinstance(expression, PrimitiveNode):
        return _wrap_primitive(state, expression.primitive)
    if isinstance(expression, ApplicationNode):
        function = _evaluate(env, state, expression.function)
        argument = _evaluate(env, state, expression.argument)
        return _apply(state, function, argument)
    if isinstance(expression, FixNode):
        # (fix f) is f applied to (lam [x] ((fix f) x)), which delays the
        # next unrolling until the result is called
        function = _evaluate(env, state, expression.body)
        parameter = state.fresh()
        unrolled = _closure(
            parameter,
            ApplicationNode(expression, VariableNode(parameter)),
            env,
        )
        return _apply(state, function, unrolled)
    raise UnhandledNodeTypeError(
        "don't know how to evaluate '{}'".format(expression)
    )


def _find_primitive_application(
    expression: ExpressionNode,
) -> Optional[Tuple[Primitive, List[ExpressionNode]]]:
    """Match (primitive arg1 ... argN) with at least as many arguments as
    the primitive takes."""
    arguments = []
    while isinstance(expression, ApplicationNode):
        arguments.append(expression.argument)
        expression = expression.function
    if not arguments or not isinstance(expression, PrimitiveNode):
        return None
    if len(arguments) < expression.primitive.arity:
        return None
    arguments.reverse()
    return expression.primitive, arguments


def _closure(
    parameter: str, body: ExpressionNode, env: Mapping[str, Value]
) -> ClosureValue:
    used = free_variables(body) - {parameter}
    return ClosureValue(
        parameter, body, {name: env[name] for name in used if name in env}
    )


def free_variables(expression: ExpressionNode) -> Set[str]:
    """The names expression uses but does not bind."""
    if isinstance(expression, VariableNode):
        return {expression.name}
    if isinstance(expression, LambdaNode):
        return free_variables(expression.body) - {expression.parameter}
    if isinstance(expression, LetNode):
        return free_variables(expression.value) | (
            free_variables(expression.body) - {expression.name}
        )
    return set().union(*map(free_variables, expression.children))


def _wrap_primitive(state: EvalState, primitive: Primitive) -> Value:
    if primitive.arity == 0:
        return _apply_primitive(state, primitive, [])
    parameters = [state.fresh() for _ in range(primitive.arity)]
    body = application(
        PrimitiveNode(primitive), *map(VariableNode, parameters)
    )
    for parameter in reversed(parameters[1:]):
        body = LambdaNode(parameter, body)
    return ClosureValue(parameters[0], body, {})


def _apply(state: EvalState, function: Value, argument: Value) -> Value:
    if not isinstance(function, ClosureValue):
        raise EvaluationError('{} is not a function'.format(function))
    env = {**function.env, function.parameter: argument}
    return _evaluate(env, state, function.body)


_V = TypeVar('_V', bound=Value)


def _expect(primitive: Primitive, value: Value, kind: Type[_V]) -> _V:
    if not isinstance(value, kind):
        raise EvaluationError(
            '{} cannot be applied to {}'.format(primitive.value, value)
        )
    return value


_arithmetic: Dict[Primitive, Callable[[int, int], int]] = {
    Primitive.ADD: operator.add,
    Primitive.SUB: operator.sub,
    Primitive.MUL: operator.mul,
}


def _apply_primitive(
    state: EvalState, primitive: Primitive, arguments: List[Value]
) -> Value:
    if primitive is Primitive.NIL:
        return ListValue([])
    if primitive in _arithmetic or primitive is Primitive.EQL:
        left, right = (
            _expect(primitive, a, IntegerValue).value for a in arguments
        )
        if primitive is Primitive.EQL:
            return BooleanValue(left == right)
        return IntegerValue(_arithmetic[primitive](left, right))
    if primitive is Primitive.NULL:
        (items,) = arguments
        return BooleanValue(not _expect(primitive, items, ListValue).elements)
    if primitive is Primitive.MAP:
        function, items = arguments
        return ListValue(
            _apply(state, function, item)
            for item in _expect(primitive, items, ListValue).elements
        )
    if primitive is Primitive.FOLDL:
        function, accumulator, items = arguments
        for item in _expect(primitive, items, ListValue).elements:
            partial = _apply(state, function, accumulator)
            accumulator = _apply(state, partial, item)
        return accumulator
    if primitive is Primitive.PAIR:
        first, second = arguments
        return PairValue(first, second)
    if primitive is Primitive.FST:
        (pair,) = arguments
        return _expect(primitive, pair, PairValue).first
    if primitive is Primitive.SND:
        (pair,) = arguments
        return _expect(primitive, pair, PairValue).second
    if primitive is Primitive.CONS:
        head, tail = arguments
        return ListValue(
            (head, *_expect(primitive, tail, ListValue).elements)
        )
    raise UnhandledNodeTypeError(
        "don't know how to apply '{}'".format(primitive.value)
    )
