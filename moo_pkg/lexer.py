"""Lexer turning source text into positioned tokens.

At each position, after skipping whitespace, the lexer tries in order:
numbers, identifiers, then the single-character operators
``^ + - * / ( ) ,``. An unrecognized character stops lexing without an
error; :attr:`Lexer.offset` then points at it and the parser reports the
unconsumed input. Only malformed numbers raise :class:`LexError`.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum

from .types import LexError

DIGITS = "0123456789"


class TokenKind(Enum):
    IDENTIFIER = "Identifier"
    NUMBER = "Number"
    ADD = "+"
    SUB = "-"
    MULT = "*"
    DIV = "/"
    POW = "^"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","


OPERATORS = frozenset(
    {TokenKind.ADD, TokenKind.SUB, TokenKind.MULT, TokenKind.DIV, TokenKind.POW}
)

SINGLE_CHAR_TOKENS = {
    "^": TokenKind.POW,
    "+": TokenKind.ADD,
    "-": TokenKind.SUB,
    "*": TokenKind.MULT,
    "/": TokenKind.DIV,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}


@dataclass(frozen=True)
class Token:
    """A lexed token with its ``[start, end)`` span in the source."""

    kind: TokenKind
    start: int
    end: int
    text: str | None = None
    value: float | None = None

    @property
    def span(self) -> tuple[int, int]:
        return self.start, self.end

    @property
    def category(self) -> str:
        """Coarse token class used in diagnostics."""
        if self.kind in OPERATORS:
            return "Operator"
        if self.kind is TokenKind.LPAREN:
            return "LParen"
        if self.kind is TokenKind.RPAREN:
            return "RParen"
        if self.kind is TokenKind.COMMA:
            return "Comma"
        return self.kind.value

    def describe(self) -> str:
        if self.kind is TokenKind.IDENTIFIER:
            return f"identifier '{self.text}'"
        if self.kind is TokenKind.NUMBER:
            return f"number {self.value:g}"
        return f"'{self.kind.value}'"


def _is_identifier_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _is_identifier_part(ch: str) -> bool:
    # combining marks (e.g. Thai vowel signs) continue a word
    return ch.isalnum() or ch == "_" or unicodedata.category(ch).startswith("M")


class Lexer:
    """Single-pass lexer over a source string."""

    def __init__(self, source: str):
        self.source = source
        self.offset = 0

    @property
    def exhausted(self) -> bool:
        """True once every character of the source has been consumed."""
        return self.offset >= len(self.source)

    def next_token(self) -> Token | None:
        """Return the next token, or None at the end or at an unknown character."""
        self._skip_whitespace()
        if self.exhausted:
            return None
        ch = self.source[self.offset]
        if ch in DIGITS:
            return self._number()
        if _is_identifier_start(ch):
            return self._identifier()
        kind = SINGLE_CHAR_TOKENS.get(ch)
        if kind is None:
            return None
        self.offset += 1
        return Token(kind, self.offset - 1, self.offset)

    def tokenize(self) -> list[Token]:
        """Lex until the input is exhausted or an unknown character is hit."""
        tokens = []
        while True:
            token = self.next_token()
            if token is None:
                return tokens
            tokens.append(token)

    def _skip_whitespace(self) -> None:
        while not self.exhausted and self.source[self.offset].isspace():
            self.offset += 1

    def _take_while(self, pos: int, chars: str) -> int:
        while pos < len(self.source) and self.source[pos] in chars:
            pos += 1
        return pos

    def _number(self) -> Token:
        start = self.offset
        if self.source[start] == "0":
            end = start + 1
        else:
            end = self._take_while(start + 1, DIGITS + "_")

        if end < len(self.source) and self.source[end] == ".":
            end = self._take_while(end + 1, DIGITS + "_")
            if end < len(self.source) and self.source[end] == ".":
                raise LexError(
                    "malformed number: multiple decimal points",
                    "MULTIPLE_DECIMAL_POINTS",
                    (start, end + 1),
                )

        literal = self.source[start:end]
        try:
            value = float(literal.replace("_", ""))
        except ValueError:
            raise LexError(
                "malformed number: not representable",
                "UNREPRESENTABLE_NUMBER",
                (start, end),
            ) from None
        self.offset = end
        return Token(TokenKind.NUMBER, start, end, text=literal, value=value)

    def _identifier(self) -> Token:
        start = self.offset
        end = start + 1
        while end < len(self.source) and _is_identifier_part(self.source[end]):
            end += 1
        self.offset = end
        return Token(TokenKind.IDENTIFIER, start, end, text=self.source[start:end])


def tokenize(source: str) -> list[Token]:
    """Lex ``source`` into a list of tokens."""
    return Lexer(source).tokenize()
