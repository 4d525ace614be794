"""Types of literals and built-in operators."""

from __future__ import annotations

from typing import Callable, Dict

from poly.syntax import BooleanNode, IntegerNode, LiteralNode, Primitive
from poly.typecheck.errors import UnhandledNodeTypeError
from poly.typecheck.state import InferState
from poly.typecheck.types import (
    ListType,
    PairType,
    Type,
    bool_type,
    function_type,
    int_type,
)


def literal_type(literal: LiteralNode) -> Type:
    if isinstance(literal, BooleanNode):
        return bool_type
    if isinstance(literal, IntegerNode):
        return int_type
    raise UnhandledNodeTypeError(
        "don't know how to handle literal '{}'".format(literal)
    )


def primitive_type(state: InferState, primitive: Primitive) -> Type:
    """A new instance of the type of primitive.

    Polymorphic slots get fresh variables on every call, so two uses of the
    same primitive are typed independently."""
    return _primitive_types[primitive](state)


def _arithmetic(_: InferState) -> Type:
    return function_type(int_type, int_type, int_type)


def _equality(_: InferState) -> Type:
    return function_type(int_type, int_type, bool_type)


def _null(state: InferState) -> Type:
    a = state.fresh()
    return function_type(ListType(a), bool_type)


def _map(state: InferState) -> Type:
    a, b = state.fresh(), state.fresh()
    return function_type(
        function_type(a, b), ListType(a), ListType(b)
    )


def _foldl(state: InferState) -> Type:
    a, b = state.fresh(), state.fresh()
    return function_type(function_type(b, a, b), b, ListType(a), b)


def _pair(state: InferState) -> Type:
    a, b = state.fresh(), state.fresh()
    return function_type(a, b, PairType(a, b))


def _fst(state: InferState) -> Type:
    a, b = state.fresh(), state.fresh()
    return function_type(PairType(a, b), a)


def _snd(state: InferState) -> Type:
    a, b = state.fresh(), state.fresh()
    return function_type(PairType(a, b), b)


def _cons(state: InferState) -> Type:
    a = state.fresh()
    return function_type(a, ListType(a), ListType(a))


def _nil(state: InferState) -> Type:
    return ListType(state.fresh())


_primitive_types: Dict[Primitive, Callable[[InferState], Type]] = {
    Primitive.ADD: _arithmetic,
    Primitive.SUB: _arithmetic,
    Primitive.MUL: _arithmetic,
    Primitive.EQL: _equality,
    Primitive.NULL: _null,
    Primitive.MAP: _map,
    Primitive.FOLDL: _foldl,
    Primitive.PAIR: _pair,
    Primitive.FST: _fst,
    Primitive.SND: _snd,
    Primitive.CONS: _cons,
    Primitive.NIL: _nil,
}
