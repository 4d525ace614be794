import unittest

import poly.tests.strategies  # for side-effects
from hypothesis import given
from hypothesis.strategies import from_type
from poly.typecheck.substitutions import Substitutions, compose
from poly.typecheck.types import (
    FunctionType,
    ListType,
    Type,
    TypeVariable,
    bool_type,
    int_type,
)

a, b, c = TypeVariable('a'), TypeVariable('b'), TypeVariable('c')


class TestCompose(unittest.TestCase):
    @given(
        from_type(Substitutions), from_type(Substitutions), from_type(Type)
    )
    def test_compose_applies_second_then_first(
        self, s1: Substitutions, s2: Substitutions, ty: Type
    ) -> None:
        self.assertEqual(s1(s2(ty)), compose(s1, s2)(ty))

    @given(
        from_type(Substitutions),
        from_type(Substitutions),
        from_type(Substitutions),
        from_type(Type),
    )
    def test_compose_is_associative(
        self,
        s1: Substitutions,
        s2: Substitutions,
        s3: Substitutions,
        ty: Type,
    ) -> None:
        self.assertEqual(
            compose(compose(s1, s2), s3)(ty),
            compose(s1, compose(s2, s3))(ty),
        )

    def test_compose_is_not_commutative(self) -> None:
        s1 = Substitutions({a: int_type})
        s2 = Substitutions({a: bool_type})
        self.assertEqual(bool_type, compose(s1, s2)(a))
        self.assertEqual(int_type, compose(s2, s1)(a))

    def test_first_is_applied_to_images_of_second(self) -> None:
        s1 = Substitutions({b: int_type})
        s2 = Substitutions({a: ListType(b)})
        self.assertEqual(
            Substitutions({a: ListType(int_type), b: int_type}),
            compose(s1, s2),
        )

    def test_empty_is_identity(self) -> None:
        sub = Substitutions({a: FunctionType(b, c)})
        self.assertEqual(sub, compose(Substitutions(), sub))
        self.assertEqual(sub, compose(sub, Substitutions()))

    def test_apply_substitution_composes(self) -> None:
        s1 = Substitutions({b: int_type})
        s2 = Substitutions({a: b})
        self.assertEqual(compose(s1, s2), s2.apply_substitution(s1))


class TestSubstitutions(unittest.TestCase):
    def test_without(self) -> None:
        sub = Substitutions({a: int_type, b: bool_type})
        self.assertEqual(Substitutions({b: bool_type}), sub.without([a]))
        self.assertIs(sub, sub.without([c]))

    def test_empty_is_falsy(self) -> None:
        self.assertFalse(Substitutions())
        self.assertTrue(Substitutions({a: int_type}))

    def test_str(self) -> None:
        self.assertEqual('{a: Int}', str(Substitutions({a: int_type})))
