"""Render expressions and inference results as text.

Expressions are printed in the syntax poly.parse accepts. Types and schemes
print themselves through str()."""

from typing import Iterable

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
    PrimitiveNode,
    ProgramNode,
    VariableNode,
)
from poly.typecheck.constraints import Constraint
from poly.typecheck.errors import UnhandledNodeTypeError
from poly.typecheck.substitutions import Substitutions


def pretty_expression(expression: ExpressionNode) -> str:
    if isinstance(expression, VariableNode):
        return expression.name
    if isinstance(expression, IntegerNode):
        return str(expression.value)
    if isinstance(expression, BooleanNode):
        return 'true' if expression.value else 'false'
    if isinstance(expression, PrimitiveNode):
        return expression.primitive.value
    if isinstance(expression, ApplicationNode):
        # (f a b) rather than ((f a) b)
        function: ExpressionNode = expression
        arguments = []
        while isinstance(function, ApplicationNode):
            arguments.append(function.argument)
            function = function.function
        parts = [function, *reversed(arguments)]
        return '(' + ' '.join(map(pretty_expression, parts)) + ')'
    if isinstance(expression, LambdaNode):
        return '(lam [{}] {})'.format(
            expression.parameter, pretty_expression(expression.body)
        )
    if isinstance(expression, LetNode):
        return '(let ([{} {}]) {})'.format(
            expression.name,
            pretty_expression(expression.value),
            pretty_expression(expression.body),
        )
    if isinstance(expression, IfNode):
        return '(if {} {} {})'.format(
            *map(pretty_expression, expression.children)
        )
    if isinstance(expression, FixNode):
        return '(fix {})'.format(pretty_expression(expression.body))
    if isinstance(expression, ListNode):
        elements = map(pretty_expression, expression.elements)
        return '[' + ' '.join(elements) + ']'
    raise UnhandledNodeTypeError(
        "don't know how to print '{}'".format(expression)
    )


def pretty_program(program: ProgramNode) -> str:
    lines = [
        '(def {} {})'.format(d.name, pretty_expression(d.value))
        for d in program.definitions
    ]
    lines.append(pretty_expression(program.body))
    return '\n'.join(lines)


def pretty_constraints(constraints: Iterable[Constraint]) -> str:
    return '\n'.join(map(str, constraints))


def pretty_substitution(sub: Substitutions) -> str:
    return '\n'.join(
        '{} := {}'.format(variable, ty) for variable, ty in sub.items()
    )
