"""
Value converter tests.

Scope
- INTEGER: base-10, sign, leading whitespace, full consumption.
- FLOAT: decimal, exponent, hexadecimal, inf/nan spellings, full consumption.
- STRING: verbatim; BOOLEAN: refused.
"""
import math
import unittest
from unittest import TestCase

from argvscan import Kind
from argvscan.values import convert, to_float, to_integer


class TestIntegerConversion(TestCase):

    def testPlainAndSigned(self):
        self.assertEqual(to_integer("5"), 5)
        self.assertEqual(to_integer("-17"), -17)
        self.assertEqual(to_integer("+3"), 3)

    def testLeadingWhitespaceAccepted(self):
        self.assertEqual(to_integer("  42"), 42)
        self.assertEqual(to_integer("\t\n\v\f\r7"), 7)

    def testOnlyAsciiWhitespaceSkipped(self):
        for raw in ("\u00a042", "\u200342", "\u300042"):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    to_integer(raw)

    def testLeadingZerosAreDecimal(self):
        self.assertEqual(to_integer("010"), 10)

    def testLargeValues(self):
        self.assertEqual(to_integer("123456789012345678901234567890"), 123456789012345678901234567890)

    def testRejected(self):
        for raw in ("", " ", "-", "+", "abc", "5x", "5 ", "1.0", "0x10", "1_000", "1e3"):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    to_integer(raw)


class TestFloatConversion(TestCase):

    def testDecimalForms(self):
        self.assertEqual(to_float("1.5"), 1.5)
        self.assertEqual(to_float("-.25"), -0.25)
        self.assertEqual(to_float("3."), 3.0)
        self.assertEqual(to_float("7"), 7.0)
        self.assertEqual(to_float(" 2.5e3"), 2500.0)
        self.assertEqual(to_float("1E-2"), 0.01)

    def testHexadecimal(self):
        self.assertEqual(to_float("0x1.8p1"), 3.0)
        self.assertEqual(to_float("-0X10"), -16.0)

    def testInfinityAndNan(self):
        self.assertEqual(to_float("inf"), math.inf)
        self.assertEqual(to_float("-Infinity"), -math.inf)
        self.assertTrue(math.isnan(to_float("nan")))
        self.assertTrue(math.isnan(to_float("NAN(123)")))

    def testOnlyAsciiWhitespaceSkipped(self):
        self.assertEqual(to_float("\t\v1.5"), 1.5)
        for raw in ("\u00a01.5", "\u2003inf", "\u3000nan"):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    to_float(raw)

    def testNegativeZeroKeepsSign(self):
        self.assertEqual(math.copysign(1.0, to_float("-0.0")), -1.0)

    def testRejected(self):
        for raw in ("", ".", "e5", "1.5x", "1.5 ", "--1", "infinit", "1e", "abc", "1_0.0"):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    to_float(raw)


class TestConvertDispatch(TestCase):

    def testDispatchByKind(self):
        self.assertEqual(convert(Kind.INTEGER, "5"), 5)
        self.assertEqual(convert(Kind.FLOAT, "5"), 5.0)
        self.assertEqual(convert(Kind.STRING, " raw text "), " raw text ")

    def testEmptyString(self):
        self.assertEqual(convert(Kind.STRING, ""), "")

    def testBooleanRefused(self):
        with self.assertRaises(TypeError):
            convert(Kind.BOOLEAN, "1")


if __name__ == "__main__":
    unittest.main()
