"""The expression tree shared by the parser, the type checker and the
pretty-printer.

Nodes are immutable and compared structurally."""

import abc
import dataclasses
import enum
from typing import Iterable, Tuple


class Primitive(enum.Enum):
    """Built-in operators. The value is the operator's name in source text."""

    ADD = '+'
    SUB = '-'
    MUL = '*'
    EQL = '=='
    NULL = 'null'
    MAP = 'map'
    FOLDL = 'foldl'
    PAIR = 'pair'
    FST = 'fst'
    SND = 'snd'
    CONS = 'cons'
    NIL = 'nil'

    @property
    def arity(self) -> int:
        return _arities[self]


_arities = {
    Primitive.ADD: 2,
    Primitive.SUB: 2,
    Primitive.MUL: 2,
    Primitive.EQL: 2,
    Primitive.NULL: 1,
    Primitive.MAP: 2,
    Primitive.FOLDL: 3,
    Primitive.PAIR: 2,
    Primitive.FST: 1,
    Primitive.SND: 1,
    Primitive.CONS: 2,
    Primitive.NIL: 0,
}


class ExpressionNode(abc.ABC):
    @property
    @abc.abstractmethod
    def children(self) -> Tuple['ExpressionNode', ...]:
        pass


@dataclasses.dataclass(frozen=True)
class VariableNode(ExpressionNode):
    name: str

    @property
    def children(self) -> Tuple[ExpressionNode, ...]:
        return ()


@dataclasses.dataclass(frozen=True)
class ApplicationNode(ExpressionNode):
    function: ExpressionNode
    argument: ExpressionNode

    @property
    def children(self) -> Tuple[ExpressionNode, ...]:
        return self.function, self.argument


@dataclasses.dataclass(frozen=True)
class LambdaNode(ExpressionNode):
    parameter: str
    body: ExpressionNode

    @property
    def children(self) -> Tuple[ExpressionNode, ...]:
        return (self.body,)


@dataclasses.dataclass(frozen=True)
class LetNode(ExpressionNode):
    name: str
    value: ExpressionNode
    body: ExpressionNode

    @property
    def children(self) -> Tuple[ExpressionNode, ...]:
        return self.value, self.body


class LiteralNode(ExpressionNode, abc.ABC):
    @property
    def children(self) -> Tuple[ExpressionNode, ...]:
        return ()


@dataclasses.dataclass(frozen=True)
class IntegerNode(LiteralNode):
    value: int


@dataclasses.dataclass(frozen=True)
class BooleanNode(LiteralNode):
    value: bool


@dataclasses.dataclass(frozen=True)
class IfNode(ExpressionNode):
    test: ExpressionNode
    then: ExpressionNode
    else_: ExpressionNode

    @property
    def children(self) -> Tuple[ExpressionNode, ...]:
        return self.test, self.then, self.else_


@dataclasses.dataclass(frozen=True)
class FixNode(ExpressionNode):
    body: ExpressionNode

    @property
    def children(self) -> Tuple[ExpressionNode, ...]:
        return (self.body,)


@dataclasses.dataclass(frozen=True)
class ListNode(ExpressionNode):
    elements: Tuple[ExpressionNode, ...]

    def __init__(self, elements: Iterable[ExpressionNode]) -> None:
        object.__setattr__(self, 'elements', tuple(elements))

    @property
    def children(self) -> Tuple[ExpressionNode, ...]:
        return self.elements


@dataclasses.dataclass(frozen=True)
class PrimitiveNode(ExpressionNode):
    primitive: Primitive

    @property
    def children(self) -> Tuple[ExpressionNode, ...]:
        return ()


@dataclasses.dataclass(frozen=True)
class DefinitionNode:
    name: str
    value: ExpressionNode


@dataclasses.dataclass(frozen=True)
class ProgramNode:
    definitions: Tuple[DefinitionNode, ...]
    body: ExpressionNode

    def __init__(
        self, definitions: Iterable[DefinitionNode], body: ExpressionNode
    ) -> None:
        object.__setattr__(self, 'definitions', tuple(definitions))
        object.__setattr__(self, 'body', body)


def application(
    function: ExpressionNode, *arguments: ExpressionNode
) -> ExpressionNode:
    """Build the curried application (function arg1 arg2 ...)."""
    for argument in arguments:
        function = ApplicationNode(function, argument)
    return function
