"""Recursive-descent parser.

Grammar, one method per level::

    Program            := AdditiveExpr
    AdditiveExpr       := MultiplicativeExpr ( ('+' | '-') MultiplicativeExpr )*
    MultiplicativeExpr := ExponentialExpr ( ('*' | '/') ExponentialExpr )*
    ExponentialExpr    := Primitive ( '^' Primitive )?
    Primitive          := Number
                        | Identifier '(' AdditiveExpr ')'
                        | Identifier                      (x or y)
                        | '(' AdditiveExpr ')'

Chains of the same precedence are read in a loop and then grouped to the
right: ``10 - 5 - 2`` is ``10 - (5 - 2)``. ``^`` takes a single primitive on
each side and does not chain; ``2^3^2`` is rejected as trailing input.

Two limits keep the tree shallow enough to walk recursively: parentheses and
calls may nest ``MAX_EXPRESSION_DEPTH`` deep, and the chains enclosing any
point may hold ``MAX_CHAIN_LENGTH`` operators in total.

Each level returns a node, ``None`` when the current token cannot start the
production (the token is pushed back for the caller), or raises a
:class:`~moo_pkg.types.ParseError`. Parsing stops at the first error.
"""

from __future__ import annotations

from typing import NoReturn

from .config import MAX_CHAIN_LENGTH, MAX_EXPRESSION_DEPTH, MAX_INPUT_LENGTH, VARIABLES
from .cursor import TokenCursor
from .expression import BinaryOp, Call, Expression, Grouping, Literal, Variable
from .functions import FunctionRegistry
from .lexer import Lexer, Token, TokenKind
from .logging_config import get_logger
from .program import Program
from .types import (
    ExpressionSyntaxError,
    ParseError,
    SemanticError,
    Span,
    ValidationError,
)

logger = get_logger("parser")

ADDITIVE = {TokenKind.ADD: "+", TokenKind.SUB: "-"}
MULTIPLICATIVE = {TokenKind.MULT: "*", TokenKind.DIV: "/"}


class Parser:
    """Parses source text against a fixed function registry.

    A parser holds no per-parse state and can be reused, including from
    several threads at once.
    """

    def __init__(self, registry: FunctionRegistry | None = None):
        self.registry = registry if registry is not None else FunctionRegistry()

    def parse(self, source: str) -> Program | None:
        """Parse ``source`` into a :class:`Program`.

        Returns:
            The program, or None when the source holds no expression at all
            (empty input, ``()``).

        Raises:
            LexError: malformed numeric literal
            ExpressionSyntaxError: unexpected or missing token
            SemanticError: unknown identifier or function
            ValidationError: input too long or too deeply nested
        """
        if len(source) > MAX_INPUT_LENGTH:
            raise ValidationError(
                f"Input too long ({len(source)} > {MAX_INPUT_LENGTH} characters)",
                "TOO_LONG",
            )
        lexer = Lexer(source)
        try:
            tokens = lexer.tokenize()
            logger.debug("Lexed %d tokens from %r", len(tokens), source)
            body = _Descent(self.registry, lexer, tokens).program()
        except ParseError as e:
            logger.debug("Parse of %r failed: %s [%s]", source, e, e.code)
            raise
        if body is None:
            return None
        return Program(body, source)


class _Descent:
    """State of a single parse: cursor position and nesting depth."""

    def __init__(self, registry: FunctionRegistry, lexer: Lexer, tokens: list[Token]):
        self.registry = registry
        self.lexer = lexer
        self.cursor: TokenCursor[Token] = TokenCursor(tokens)
        # open parentheses and calls around the current token
        self.depth = 0
        # operators in the chains that enclose the current token
        self.operators = 0

    def program(self) -> Expression | None:
        body = self.additive()
        token = self.cursor.advance()
        if token is not None:
            raise ExpressionSyntaxError(
                f"Unexpected {token.describe()} after end of expression",
                "TRAILING_INPUT",
                token.span,
            )
        self._check_unlexed()
        return body

    def additive(self) -> Expression | None:
        return self._chain(self.multiplicative, ADDITIVE)

    def multiplicative(self) -> Expression | None:
        return self._chain(self.exponential, MULTIPLICATIVE)

    def _chain(self, operand, operators) -> Expression | None:
        """Parse ``operand (op operand)*`` and group the chain to the right."""
        first = operand()
        if first is None:
            return None
        operands = [first]
        symbols = []
        while True:
            token = self.cursor.advance()
            if token is None:
                break
            if token.kind not in operators:
                self.cursor.retreat()
                break
            symbols.append(operators[token.kind])
            self.operators += 1
            if self.operators > MAX_CHAIN_LENGTH:
                raise ValidationError(
                    f"Operator chain too long (>{MAX_CHAIN_LENGTH} operators)",
                    "TOO_LONG_CHAIN",
                    token.span,
                )
            right = operand()
            if right is None:
                self._missing(
                    f"Expected an operand after '{operators[token.kind]}'",
                    "MISSING_OPERAND",
                    token.span,
                )
            operands.append(right)
        self.operators -= len(symbols)

        node = operands.pop()
        while symbols:
            node = BinaryOp(operands.pop(), symbols.pop(), node)
        return node

    def exponential(self) -> Expression | None:
        left = self.primitive()
        if left is None:
            return None
        token = self.cursor.advance()
        if token is None:
            return left
        if token.kind is not TokenKind.POW:
            self.cursor.retreat()
            return left
        right = self.primitive()
        if right is None:
            self._missing("Expected an exponent after '^'", "MISSING_OPERAND", token.span)
        return BinaryOp(left, "^", right)

    def primitive(self) -> Expression | None:
        token = self.cursor.advance()
        if token is None:
            return None
        if token.kind is TokenKind.NUMBER:
            return Literal(token.value)
        if token.kind is TokenKind.IDENTIFIER:
            return self._identifier(token)
        if token.kind is TokenKind.LPAREN:
            return self._group(token)
        self.cursor.retreat()
        return None

    def _identifier(self, token: Token) -> Expression:
        name = token.text
        if name in VARIABLES:
            return Variable(name)

        following = self.cursor.advance()
        opens_call = following is not None and following.kind is TokenKind.LPAREN
        function = self.registry.get(name)
        if function is None:
            if opens_call:
                raise SemanticError(f"Unknown function '{name}'", "UNKNOWN_FUNCTION", token.span)
            raise SemanticError(f"Unknown identifier '{name}'", "UNKNOWN_IDENTIFIER", token.span)
        if not opens_call:
            self._missing(
                f"Expected '(' after function name '{name}'", "EXPECTED_LPAREN", token.span
            )

        with _Nesting(self):
            argument = self.additive()
        if argument is None:
            self._missing(
                f"Function '{name}' requires an argument", "MISSING_ARGUMENT", token.span
            )
        closing = self.cursor.advance()
        if closing is None or closing.kind is not TokenKind.RPAREN:
            self._missing(
                f"Expected ')' to close call to '{name}'",
                "UNTERMINATED_CALL",
                (token.start, self._position()),
            )
        return Call(name, argument, function)

    def _group(self, opening: Token) -> Grouping | None:
        with _Nesting(self):
            inner = self.additive()
        closing = self.cursor.advance()
        if closing is None or closing.kind is not TokenKind.RPAREN:
            self._missing(
                "Expected ')' to close '('",
                "UNTERMINATED_GROUP",
                (opening.start, self._position()),
            )
        if inner is None:
            # "()" stands for no expression; callers decide if that is legal
            return None
        return Grouping(inner)

    def _position(self) -> int:
        if self.cursor.position == 0:
            return 0
        self.cursor.retreat()
        token = self.cursor.advance()
        return token.end

    def _check_unlexed(self) -> None:
        if not self.lexer.exhausted:
            offset = self.lexer.offset
            raise ExpressionSyntaxError(
                f"Unexpected character {self.lexer.source[offset]!r}",
                "UNEXPECTED_CHARACTER",
                (offset, offset + 1),
            )

    def _missing(self, message: str, code: str, span: Span) -> NoReturn:
        """Raise for a required token or operand that is not there.

        When the tokens ran out because the lexer stopped at a character it
        does not know, that character is the better diagnostic.
        """
        if self.cursor.exhausted:
            self._check_unlexed()
        raise ExpressionSyntaxError(message, code, span)


class _Nesting:
    """Tracks parenthesis and call depth and rejects input nested beyond the limit."""

    def __init__(self, descent: _Descent):
        self.descent = descent

    def __enter__(self) -> None:
        self.descent.depth += 1
        if self.descent.depth > MAX_EXPRESSION_DEPTH:
            raise ValidationError(
                f"Expression nested too deeply "
                f"(>{MAX_EXPRESSION_DEPTH} levels of parentheses or calls)",
                "TOO_DEEP",
            )

    def __exit__(self, *exc_info) -> None:
        self.descent.depth -= 1


def parse(source: str, registry: FunctionRegistry | None = None) -> Program | None:
    """Parse ``source`` with ``registry`` (built-in functions by default)."""
    return Parser(registry).parse(source)
