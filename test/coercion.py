# python
"""
Coercion module behavioral tests.

Scope
- bool spellings (case-sensitive), str passthrough, int and float grammars.
- whole-token consumption: trailing or leading garbage always fails.
- FieldType / resolve: optional unwrapping, zero values, unsupported annotations.

Conventions
- Test method names follow CamelCase per project convention.
- Failure is observed as the Unset sentinel, never as an exception.
"""

from __future__ import annotations

import math
import typing
import unittest
from unittest import TestCase

from declarg import ArgSpan
from declarg.coercion import FALSY, TRUTHY, FieldType, coerce, convertible, resolve
from declarg.utils import Unset


class TestBoolCoercion(TestCase):

    def testTruthySpellings(self):
        for token in ("true", "1", "yes", "on", "y"):
            with self.subTest(token=token):
                self.assertIs(coerce(bool, token), True)

    def testFalsySpellings(self):
        for token in ("false", "0", "no", "off", "n"):
            with self.subTest(token=token):
                self.assertIs(coerce(bool, token), False)

    def testSpellingsAreCaseSensitive(self):
        for token in ("True", "YES", "On", "N", "FALSE"):
            with self.subTest(token=token):
                self.assertIs(coerce(bool, token), Unset)

    def testUnknownSpellingsFail(self):
        for token in ("", "maybe", "2", " true", "true "):
            with self.subTest(token=token):
                self.assertIs(coerce(bool, token), Unset)

    def testSpellingSetsAreDisjoint(self):
        self.assertFalse(TRUTHY & FALSY)


class TestStrCoercion(TestCase):

    def testTokenReturnedUnchanged(self):
        for token in ("", "hello", "  spaced  ", "-dash", "a=b"):
            with self.subTest(token=token):
                self.assertEqual(coerce(str, token), token)


class TestIntCoercion(TestCase):

    def testAcceptedTokens(self):
        cases = {
            "0": 0,
            "42": 42,
            "-50": -50,
            "9999999999": 9999999999,
            "007": 7,
        }
        for token, expected in cases.items():
            with self.subTest(token=token):
                self.assertEqual(coerce(int, token), expected)

    def testRejectedTokens(self):
        for token in ("", "12abc", "abc", "+5", " 5", "5 ", "1_000", "0x10", "3.14", "-", "١٢"):
            with self.subTest(token=token):
                self.assertIs(coerce(int, token), Unset)

    def testBoolIsNotAnInt(self):
        self.assertIs(coerce(bool, "5"), Unset)


class TestFloatCoercion(TestCase):

    def testAcceptedTokens(self):
        cases = {
            "3.14": 3.14,
            "-50": -50.0,
            "1.": 1.0,
            ".5": 0.5,
            "2.5e-3": 2.5e-3,
            "1E10": 1e10,
        }
        for token, expected in cases.items():
            with self.subTest(token=token):
                self.assertEqual(coerce(float, token), expected)

    def testSpecialSpellings(self):
        self.assertEqual(coerce(float, "inf"), math.inf)
        self.assertEqual(coerce(float, "-Infinity"), -math.inf)
        self.assertTrue(math.isnan(coerce(float, "NaN")))

    def testRejectedTokens(self):
        for token in ("", "12abc", "1.2.3", "e5", ".", "+1.0", " 1.0", "1.0 ", "1,5", "1_0.0", "infinit"):
            with self.subTest(token=token):
                self.assertIs(coerce(float, token), Unset)

    def testOverflowFails(self):
        self.assertIs(coerce(float, "1e999"), Unset)
        self.assertIs(coerce(float, "-1e999"), Unset)

    def testUnderflowToZeroFails(self):
        self.assertIs(coerce(float, "1e-400"), Unset)
        self.assertIs(coerce(float, "-2.5e-999"), Unset)

    def testZeroSpellingsStayZero(self):
        for token in ("0", "0.0", "-0", ".0e-400", "0e999"):
            with self.subTest(token=token):
                self.assertEqual(coerce(float, token), 0.0)

    def testSubnormalKept(self):
        self.assertEqual(coerce(float, "5e-324"), 5e-324)


class TestUnsupportedKinds(TestCase):

    def testConvertible(self):
        for kind in (bool, str, int, float):
            with self.subTest(kind=kind):
                self.assertTrue(convertible(kind))
        self.assertFalse(convertible(complex))
        self.assertFalse(convertible(ArgSpan))

    def testCoerceUnsupportedKindRaises(self):
        with self.assertRaises(TypeError):
            coerce(complex, "1")

    def testCoerceUnhashableKindRaises(self):
        with self.assertRaises(TypeError):
            coerce([], "1")


class TestFieldType(TestCase):

    def testPlainType(self):
        self.assertEqual(resolve(int), FieldType(int, False))

    def testOptionalForms(self):
        for annotation in (int | None, None | int, typing.Optional[int], typing.Union[int, None]):
            with self.subTest(annotation=annotation):
                self.assertEqual(resolve(annotation), FieldType(int, True))

    def testMultiMemberUnionRejected(self):
        with self.assertRaises(TypeError):
            resolve(int | str)
        with self.assertRaises(TypeError):
            resolve(int | str | None)

    def testNonTypeRejected(self):
        with self.assertRaises(TypeError):
            resolve("int")

    def testZeroValues(self):
        self.assertIs(FieldType(bool, False).zero, False)
        self.assertEqual(FieldType(int, False).zero, 0)
        self.assertEqual(FieldType(float, False).zero, 0.0)
        self.assertEqual(FieldType(str, False).zero, "")
        self.assertIsNone(FieldType(int, True).zero)
        self.assertTrue(FieldType(ArgSpan, False).zero.empty())

    def testOptionalDelegatesToInner(self):
        kind = resolve(int | None)
        self.assertEqual(kind.coerce("7"), 7)
        self.assertIs(kind.coerce("seven"), Unset)


if __name__ == "__main__":
    unittest.main()
