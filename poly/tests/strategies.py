from hypothesis.strategies import (
    SearchStrategy,
    booleans,
    builds,
    dictionaries,
    integers,
    lists,
    recursive,
    register_type_strategy,
    sampled_from,
)

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
    VariableNode,
)
from poly.typecheck.substitutions import Substitutions
from poly.typecheck.types import (
    FunctionType,
    ListType,
    PairType,
    Type,
    TypeVariable,
    bool_type,
    int_type,
)


def type_variable_strategy(
    names: str = 'abcde',
) -> SearchStrategy[TypeVariable]:
    return sampled_from(names).map(TypeVariable)


def type_strategy(
    variables: SearchStrategy[TypeVariable] = type_variable_strategy(),
) -> SearchStrategy[Type]:
    return recursive(
        variables | sampled_from([int_type, bool_type]),
        lambda children: builds(FunctionType, children, children)
        | builds(ListType, children)
        | builds(PairType, children, children),
        max_leaves=8,
    )


def substitutions_strategy(
    variables: SearchStrategy[TypeVariable] = type_variable_strategy(),
    images: SearchStrategy[Type] = type_strategy(),
) -> SearchStrategy[Substitutions]:
    return dictionaries(variables, images, max_size=4).map(Substitutions)


_names = sampled_from(['x', 'y', 'f', 'g', 'id'])


def expression_strategy(
    names: SearchStrategy[str] = _names,
) -> SearchStrategy[ExpressionNode]:
    return recursive(
        builds(VariableNode, names)
        | builds(IntegerNode, integers())
        | builds(BooleanNode, booleans())
        | builds(PrimitiveNode, sampled_from(Primitive)),
        lambda children: builds(ApplicationNode, children, children)
        | builds(LambdaNode, names, children)
        | builds(LetNode, names, children, children)
        | builds(IfNode, children, children, children)
        | builds(FixNode, children)
        | builds(ListNode, lists(children, max_size=3)),
        max_leaves=10,
    )


register_type_strategy(TypeVariable, type_variable_strategy())
register_type_strategy(Type, type_strategy())
register_type_strategy(Substitutions, substitutions_strategy())
register_type_strategy(ExpressionNode, expression_strategy())
