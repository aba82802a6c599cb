"""Tests for default value classification and formatting."""

import unittest

from customizer.values import (
    classify_default,
    format_value,
    is_integer_literal,
    parse_number,
)


class TestParseNumber(unittest.TestCase):
    def test_integer_literal(self) -> None:
        self.assertEqual(parse_number("42"), 42)
        self.assertIsInstance(parse_number("42"), int)

    def test_decimal_literal(self) -> None:
        self.assertEqual(parse_number("0.5"), 0.5)
        self.assertEqual(parse_number(".5"), 0.5)
        self.assertEqual(parse_number("-2.25"), -2.25)

    def test_exponent_literal(self) -> None:
        self.assertEqual(parse_number("1e3"), 1000.0)

    def test_rejects_expressions_and_words(self) -> None:
        self.assertIsNone(parse_number("radius * 2"))
        self.assertIsNone(parse_number("10mm"))
        self.assertIsNone(parse_number("nan"))
        self.assertIsNone(parse_number(""))

    def test_integer_literal_check(self) -> None:
        self.assertTrue(is_integer_literal("2"))
        self.assertFalse(is_integer_literal("2.0"))
        self.assertFalse(is_integer_literal("0.5"))
        self.assertFalse(is_integer_literal("abc"))

    def test_overflowing_exponent_is_not_a_number(self) -> None:
        self.assertIsNone(parse_number("1e400"))
        self.assertIsNone(parse_number("-2.5e999"))

    def test_long_integer_literal(self) -> None:
        digits = "9" * 400
        self.assertEqual(parse_number(digits), int(digits))
        self.assertTrue(is_integer_literal(digits))
        self.assertEqual(classify_default(digits), ("integer", int(digits)))


class TestClassifyDefault(unittest.TestCase):
    def test_double_quoted_string(self) -> None:
        self.assertEqual(classify_default('"hello"'), ("string", "hello"))

    def test_single_quoted_string(self) -> None:
        self.assertEqual(classify_default("'hi there'"), ("string", "hi there"))

    def test_empty_string(self) -> None:
        self.assertEqual(classify_default('""'), ("string", ""))

    def test_quoted_number_stays_string(self) -> None:
        self.assertEqual(classify_default('"50"'), ("string", "50"))

    def test_integer(self) -> None:
        self.assertEqual(classify_default(" 50 "), ("integer", 50))

    def test_decimal_point_makes_number(self) -> None:
        value_type, value = classify_default("2.0")
        self.assertEqual(value_type, "number")
        self.assertEqual(value, 2.0)

    def test_negative_number(self) -> None:
        self.assertEqual(classify_default("-2.5"), ("number", -2.5))

    def test_booleans(self) -> None:
        self.assertEqual(classify_default("true"), ("boolean", True))
        self.assertEqual(classify_default("false"), ("boolean", False))

    def test_boolean_is_case_sensitive(self) -> None:
        self.assertEqual(classify_default("True"), ("string", "True"))

    def test_bare_expression(self) -> None:
        self.assertEqual(classify_default("radius * 2"), ("string", "radius * 2"))

    def test_vector_literal_is_bare_string(self) -> None:
        self.assertEqual(classify_default("[1, 2, 3]"), ("string", "[1, 2, 3]"))

    def test_mismatched_quotes_are_bare(self) -> None:
        self.assertEqual(classify_default("\"abc'"), ("string", "\"abc'"))


class TestFormatValueRoundTrip(unittest.TestCase):
    """Classifying a formatted value yields the same (type, value)."""

    def test_round_trip(self) -> None:
        literals = [
            "0",
            "-7",
            "50",
            "2.5",
            "1.0",
            "-0.125",
            "1e3",
            "1.5e20",
            "1e400",
            "9" * 400,
            "true",
            "false",
            '"text"',
            '"a, b"',
            "''",
            "bare_identifier",
        ]
        for literal in literals:
            with self.subTest(literal=literal):
                value_type, value = classify_default(literal)
                again = classify_default(format_value(value_type, value))
                self.assertEqual(again, (value_type, value))
                self.assertIs(type(again[1]), type(value))

    def test_boolean_formatting(self) -> None:
        self.assertEqual(format_value("boolean", True), "true")

    def test_string_formatting_quotes(self) -> None:
        self.assertEqual(format_value("string", "abc"), '"abc"')


if __name__ == "__main__":
    unittest.main()
