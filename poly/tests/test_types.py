import unittest

import poly.tests.strategies  # for side-effects
from hypothesis import given
from hypothesis.strategies import from_type
from poly.typecheck.substitutions import Substitutions
from poly.typecheck.types import (
    ForAll,
    FunctionType,
    ListType,
    PairType,
    Type,
    TypeConstant,
    TypeVariable,
    bool_type,
    function_type,
    int_type,
)

a, b, c = TypeVariable('a'), TypeVariable('b'), TypeVariable('c')


class TestTypeEquality(unittest.TestCase):
    def test_structural_equality(self) -> None:
        self.assertEqual(
            FunctionType(a, ListType(b)), FunctionType(a, ListType(b))
        )
        self.assertEqual(TypeVariable('a'), a)
        self.assertEqual(TypeConstant('Int'), int_type)

    def test_different_shapes_are_not_equal(self) -> None:
        self.assertNotEqual(PairType(a, b), FunctionType(a, b))
        self.assertNotEqual(TypeVariable('Int'), int_type)
        self.assertNotEqual(ListType(a), ListType(b))

    def test_equal_types_hash_equal(self) -> None:
        self.assertEqual(
            hash(PairType(a, ListType(int_type))),
            hash(PairType(TypeVariable('a'), ListType(TypeConstant('Int')))),
        )
        self.assertEqual(len({a, TypeVariable('a'), b}), 2)

    @given(from_type(Type))
    def test_equality_is_reflexive(self, ty: Type) -> None:
        self.assertEqual(ty, ty)


class TestApplySubstitution(unittest.TestCase):
    def test_variable_in_domain(self) -> None:
        sub = Substitutions({a: int_type})
        self.assertEqual(int_type, a.apply_substitution(sub))

    def test_variable_not_in_domain(self) -> None:
        sub = Substitutions({a: int_type})
        self.assertEqual(b, b.apply_substitution(sub))

    def test_composite_types(self) -> None:
        sub = Substitutions({a: int_type, b: ListType(c)})
        ty = FunctionType(PairType(a, b), ListType(a))
        self.assertEqual(
            FunctionType(PairType(int_type, ListType(c)), ListType(int_type)),
            sub(ty),
        )

    def test_images_are_not_substituted_again(self) -> None:
        sub = Substitutions({a: b, b: int_type})
        self.assertEqual(b, sub(a))

    @given(from_type(Type))
    def test_empty_substitution_is_identity(self, ty: Type) -> None:
        self.assertEqual(ty, ty.apply_substitution(Substitutions()))

    @given(from_type(Type), from_type(Substitutions))
    def test_substituted_variables_leave(
        self, ty: Type, sub: Substitutions
    ) -> None:
        images = set()
        for image in sub.values():
            images.update(image.free_type_variables())
        result = ty.apply_substitution(sub)
        for variable in set(sub) - images:
            self.assertNotIn(variable, result.free_type_variables())


class TestFreeTypeVariables(unittest.TestCase):
    def test_constants_have_none(self) -> None:
        self.assertEqual(set(), set(int_type.free_type_variables()))

    def test_first_occurrence_order(self) -> None:
        ty = function_type(b, PairType(a, b), ListType(c), a)
        self.assertEqual([b, a, c], list(ty.free_type_variables()))

    def test_scheme_excludes_quantified_variables(self) -> None:
        scheme = ForAll([a], function_type(a, b, a))
        self.assertEqual([b], list(scheme.free_type_variables()))


class TestForAll(unittest.TestCase):
    def test_substitution_does_not_capture_quantified_variables(
        self,
    ) -> None:
        scheme = ForAll([a], FunctionType(a, b))
        sub = Substitutions({a: int_type, b: bool_type})
        self.assertEqual(
            ForAll([a], FunctionType(a, bool_type)),
            scheme.apply_substitution(sub),
        )

    def test_str(self) -> None:
        self.assertEqual(
            'forall a b. (a -> b) -> [a] -> [b]',
            str(
                ForAll(
                    [a, b],
                    function_type(
                        FunctionType(a, b), ListType(a), ListType(b)
                    ),
                )
            ),
        )
        self.assertEqual('Int', str(ForAll([], int_type)))


class TestStr(unittest.TestCase):
    def test_arrows_associate_right(self) -> None:
        self.assertEqual('a -> b -> c', str(function_type(a, b, c)))
        self.assertEqual(
            '(a -> b) -> c', str(FunctionType(FunctionType(a, b), c))
        )

    def test_lists_and_pairs(self) -> None:
        self.assertEqual(
            '[(Int, Bool)]', str(ListType(PairType(int_type, bool_type)))
        )


class TestFunctionType(unittest.TestCase):
    def test_single_type(self) -> None:
        self.assertEqual(int_type, function_type(int_type))

    def test_curried(self) -> None:
        self.assertEqual(
            FunctionType(a, FunctionType(b, c)), function_type(a, b, c)
        )

    def test_no_types(self) -> None:
        with self.assertRaises(ValueError):
            function_type()
