"""Test error codes returned by parsing and evaluation."""

import unittest

from moo_pkg.api import evaluate
from moo_pkg.parser import parse
from moo_pkg.types import (
    ExpressionSyntaxError,
    LexError,
    ParseError,
    SemanticError,
    ValidationError,
)


class TestErrorCodes(unittest.TestCase):
    """Each failure kind carries a stable code."""

    CASES = [
        ("1.2.3", LexError, "MULTIPLE_DECIMAL_POINTS"),
        ("(1 + 2", ExpressionSyntaxError, "UNTERMINATED_GROUP"),
        ("cos(1", ExpressionSyntaxError, "UNTERMINATED_CALL"),
        ("abs()", ExpressionSyntaxError, "MISSING_ARGUMENT"),
        ("1 *", ExpressionSyntaxError, "MISSING_OPERAND"),
        ("sin + 1", ExpressionSyntaxError, "EXPECTED_LPAREN"),
        ("1 2", ExpressionSyntaxError, "TRAILING_INPUT"),
        ("1 # 2", ExpressionSyntaxError, "UNEXPECTED_CHARACTER"),
        ("foo(1)", SemanticError, "UNKNOWN_FUNCTION"),
        ("foo", SemanticError, "UNKNOWN_IDENTIFIER"),
    ]

    def test_parse_error_codes(self):
        for source, error_type, code in self.CASES:
            with self.subTest(source=source):
                with self.assertRaises(error_type) as ctx:
                    parse(source)
                self.assertEqual(ctx.exception.code, code)
                self.assertIsNotNone(ctx.exception.span)

    def test_api_reports_same_codes(self):
        for source, _, code in self.CASES:
            with self.subTest(source=source):
                result = evaluate(source)
                self.assertFalse(result.ok)
                self.assertEqual(result.error_code, code)

    def test_validation_error_has_no_span(self):
        with self.assertRaises(ValidationError) as ctx:
            parse("(" * 120 + "x" + ")" * 120)
        self.assertEqual(ctx.exception.code, "TOO_DEEP")
        self.assertIsNone(ctx.exception.span)
        self.assertNotIn("(at", str(ctx.exception))

    def test_message_includes_span(self):
        with self.assertRaises(ParseError) as ctx:
            parse("1 + foo")
        self.assertEqual(str(ctx.exception), "Unknown identifier 'foo' (at 4..7)")

    def test_default_codes(self):
        self.assertEqual(ParseError("boom").code, "PARSE_ERROR")
        self.assertEqual(LexError("boom").code, "LEX_ERROR")
        self.assertEqual(SemanticError("boom").code, "SEMANTIC_ERROR")


if __name__ == "__main__":
    unittest.main()
