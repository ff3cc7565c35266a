"""Unit tests for the lexer."""

import unittest

from moo_pkg.lexer import Lexer, TokenKind, tokenize
from moo_pkg.types import LexError


def categories(source):
    return [token.category for token in tokenize(source)]


class TestNumbers(unittest.TestCase):
    """Numeric literal rules."""

    def test_integer(self):
        tokens = tokenize(" 10")
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].kind, TokenKind.NUMBER)
        self.assertEqual(tokens[0].value, 10.0)
        self.assertEqual(tokens[0].span, (1, 3))

    def test_zero(self):
        tokens = tokenize(" 0")
        self.assertEqual([t.value for t in tokens], [0.0])

    def test_float(self):
        self.assertEqual([t.value for t in tokenize(" 10.1")], [10.1])
        self.assertEqual([t.value for t in tokenize(" 0.1")], [0.1])

    def test_underscore_separators_are_stripped(self):
        self.assertEqual([t.value for t in tokenize(" 1_10")], [110.0])
        self.assertEqual([t.value for t in tokenize("1_000.5")], [1000.5])
        self.assertEqual([t.value for t in tokenize("1.2_5")], [1.25])

    def test_trailing_point(self):
        tokens = tokenize("1.")
        self.assertEqual([t.value for t in tokens], [1.0])
        self.assertEqual(tokens[0].span, (0, 2))

    def test_leading_zero_is_its_own_number(self):
        tokens = tokenize("05")
        self.assertEqual([t.value for t in tokens], [0.0, 5.0])

    def test_multiple_decimal_points(self):
        with self.assertRaises(LexError) as ctx:
            tokenize(" 10.1.1")
        self.assertEqual(ctx.exception.code, "MULTIPLE_DECIMAL_POINTS")
        self.assertIn("multiple decimal points", str(ctx.exception))

    def test_separate_decimals_are_independent(self):
        tokens = tokenize("1.5 + 2.5")
        self.assertEqual([t.value for t in tokens if t.kind is TokenKind.NUMBER], [1.5, 2.5])


class TestIdentifiers(unittest.TestCase):
    """Identifier rules."""

    def assertSingleIdentifier(self, source):
        tokens = tokenize(source)
        self.assertEqual(len(tokens), 1, tokens)
        self.assertEqual(tokens[0].kind, TokenKind.IDENTIFIER)
        self.assertEqual(tokens[0].text, source)
        self.assertEqual(tokens[0].span, (0, len(source)))

    def test_x(self):
        self.assertSingleIdentifier("x")

    def test_non_ascii(self):
        self.assertSingleIdentifier("วัว")

    def test_underscore(self):
        self.assertSingleIdentifier("_cow")

    def test_digits_and_underscore(self):
        self.assertSingleIdentifier("boon1_")

    def test_identifier_stops_at_operator(self):
        tokens = tokenize("sin(x)")
        self.assertEqual(tokens[0].text, "sin")
        self.assertEqual(tokens[1].kind, TokenKind.LPAREN)


class TestExpressions(unittest.TestCase):
    """Token sequences for whole expressions."""

    def test_sum(self):
        self.assertEqual(categories(" 10  + x"), ["Number", "Operator", "Identifier"])

    def test_group(self):
        self.assertEqual(
            categories(" (10 / 5)"),
            ["LParen", "Number", "Operator", "Number", "RParen"],
        )

    def test_all_single_characters(self):
        kinds = [t.kind for t in tokenize("^+-*/(),")]
        self.assertEqual(
            kinds,
            [
                TokenKind.POW,
                TokenKind.ADD,
                TokenKind.SUB,
                TokenKind.MULT,
                TokenKind.DIV,
                TokenKind.LPAREN,
                TokenKind.RPAREN,
                TokenKind.COMMA,
            ],
        )

    def test_whitespace_of_any_kind(self):
        self.assertEqual(categories("\t1\n* 2 "), ["Number", "Operator", "Number"])

    def test_unknown_character_stops_lexing(self):
        lexer = Lexer("1 $ 2")
        tokens = lexer.tokenize()
        self.assertEqual([t.value for t in tokens], [1.0])
        self.assertFalse(lexer.exhausted)
        self.assertEqual(lexer.offset, 2)

    def test_empty_source(self):
        lexer = Lexer("   ")
        self.assertEqual(lexer.tokenize(), [])
        self.assertTrue(lexer.exhausted)

    def test_next_token_after_end(self):
        lexer = Lexer("x")
        self.assertIsNotNone(lexer.next_token())
        self.assertIsNone(lexer.next_token())
        self.assertIsNone(lexer.next_token())


if __name__ == "__main__":
    unittest.main()
