import unittest

import poly.tests.strategies  # for side-effects
from hypothesis import given
from hypothesis.strategies import from_type
from poly.typecheck.env import Environment
from poly.typecheck.errors import InternalError
from poly.typecheck.generalization import (
    close_over,
    generalize,
    instantiate,
    normalize,
)
from poly.typecheck.state import InferState
from poly.typecheck.substitutions import Substitutions
from poly.typecheck.types import (
    ForAll,
    FunctionType,
    ListType,
    PairType,
    Type,
    TypeVariable,
    function_type,
    int_type,
)

a, b, c = TypeVariable('a'), TypeVariable('b'), TypeVariable('c')


class TestGeneralize(unittest.TestCase):
    def test_empty_environment(self) -> None:
        self.assertEqual(
            ForAll([a, b], FunctionType(a, b)),
            generalize(Environment(), FunctionType(a, b)),
        )

    def test_environment_variables_stay_free(self) -> None:
        env = Environment({'x': ForAll([], ListType(b))})
        scheme = generalize(env, function_type(a, b, c))
        self.assertEqual((a, c), scheme.variables)
        self.assertEqual([b], list(scheme.free_type_variables()))

    def test_monotype(self) -> None:
        self.assertEqual(
            ForAll([], int_type), generalize(Environment(), int_type)
        )


class TestInstantiate(unittest.TestCase):
    def test_quantified_variables_become_fresh(self) -> None:
        state = InferState()
        scheme = ForAll([a, b], PairType(a, FunctionType(b, c)))
        ty = instantiate(state, scheme)
        self.assertEqual(
            PairType(
                TypeVariable('t1'), FunctionType(TypeVariable('t2'), c)
            ),
            ty,
        )
        self.assertEqual(2, state.count)

    def test_instances_are_distinct(self) -> None:
        state = InferState()
        scheme = ForAll([a], FunctionType(a, a))
        self.assertNotEqual(
            instantiate(state, scheme), instantiate(state, scheme)
        )

    def test_monotype_is_unchanged(self) -> None:
        state = InferState()
        scheme = ForAll([], FunctionType(a, a))
        self.assertEqual(FunctionType(a, a), instantiate(state, scheme))
        self.assertEqual(0, state.count)


class TestNormalize(unittest.TestCase):
    def test_renames_in_order_of_occurrence(self) -> None:
        t3, t7 = TypeVariable('t3'), TypeVariable('t7')
        scheme = ForAll([t3, t7], FunctionType(t7, ListType(t3)))
        self.assertEqual(
            ForAll([a, b], FunctionType(a, ListType(b))), normalize(scheme)
        )

    def test_many_variables(self) -> None:
        variables = [TypeVariable(f't{i}') for i in range(28)]
        scheme = normalize(ForAll(variables, function_type(*variables)))
        names = [v.name for v in scheme.variables]
        self.assertEqual('z', names[25])
        self.assertEqual(['aa', 'ab'], names[26:])

    def test_alpha_equivalent_schemes_print_the_same(self) -> None:
        x, y = TypeVariable('x'), TypeVariable('y')
        left = ForAll([x, y], PairType(x, y))
        right = ForAll([y, x], PairType(y, x))
        self.assertEqual(str(normalize(left)), str(normalize(right)))

    def test_quantified_variable_missing_from_body(self) -> None:
        with self.assertRaises(InternalError):
            normalize(ForAll([a, b], ListType(a)))

    def test_free_variable_in_body(self) -> None:
        with self.assertRaises(InternalError):
            normalize(ForAll([a], FunctionType(a, b)))

    @given(from_type(Type))
    def test_idempotent(self, ty: Type) -> None:
        once = close_over(ty)
        self.assertEqual(once, normalize(once))

    @given(from_type(Type))
    def test_renaming_does_not_change_normal_form(self, ty: Type) -> None:
        renaming = Substitutions(
            {
                v: TypeVariable('r' + v.name)
                for v in ty.free_type_variables()
            }
        )
        self.assertEqual(close_over(ty), close_over(renaming(ty)))
