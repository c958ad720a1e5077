"""
Jam Session parser.

Precedence-climbing parser producing the host's prefix-array expression
form directly (there is no separate AST):

    2 + 2                -> ["+", 2, 2]
    get("width") + 3     -> ["+", ["get", "width"], 3]
    height * 2 > 10      -> [">", ["*", ["get", "height"], 2], 10]
    a || b && c          -> ["any", ["get", "a"], ["all", ["get", "b"], ["get", "c"]]]

A bare identifier is a feature property lookup (["get", name]); an
identifier followed by parentheses is an operator call (zoom() -> ["zoom"]).
"""

from typing import Any, Dict, List, NamedTuple

from exceptions import ExpressionSyntaxError
from .lexer import Token, TokenType, tokenize


class BinaryOperator(NamedTuple):
    precedence: int
    output: str
    right_assoc: bool = False


BINARY_OPERATORS: Dict[str, BinaryOperator] = {
    "||": BinaryOperator(1, "any"),
    "&&": BinaryOperator(2, "all"),
    "==": BinaryOperator(3, "=="),
    "!=": BinaryOperator(3, "!="),
    "<": BinaryOperator(4, "<"),
    "<=": BinaryOperator(4, "<="),
    ">": BinaryOperator(4, ">"),
    ">=": BinaryOperator(4, ">="),
    "+": BinaryOperator(5, "+"),
    "-": BinaryOperator(5, "-"),
    "*": BinaryOperator(6, "*"),
    "/": BinaryOperator(6, "/"),
    "%": BinaryOperator(6, "%"),
    "^": BinaryOperator(7, "^", right_assoc=True),
}

UNARY_OPERATORS = {"-": "-", "!": "!"}

# Operand of a prefix operator binds like the right side of "^", so -2 ^ 2 is -(2 ^ 2)
UNARY_OPERAND_PRECEDENCE = BINARY_OPERATORS["^"].precedence

PROPERTY_LOOKUP = "get"


class Parser:
    """Parses one Jam Session expression into a nested list."""

    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = tokenize(source)
        self.index = 0

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.type is not TokenType.EOF:
            self.index += 1
        return token

    def _error(self, message: str, token: Token) -> ExpressionSyntaxError:
        return ExpressionSyntaxError(message, self.source, token.position)

    def _expect(self, token_type: TokenType, message: str) -> Token:
        if self.current.type is not token_type:
            raise self._error(f"{message}, found {self.current.describe()}", self.current)
        return self._advance()

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def parse(self) -> Any:
        if self.current.type is TokenType.EOF:
            raise self._error("Empty expression", self.current)
        result = self._parse_binary(0)
        if self.current.type is TokenType.RPAREN:
            raise self._error("Unbalanced parentheses: unexpected ')'", self.current)
        if self.current.type is not TokenType.EOF:
            raise self._error(f"Unexpected token {self.current.describe()}", self.current)
        return result

    def _parse_binary(self, min_precedence: int) -> Any:
        left = self._parse_unary()
        while self.current.type is TokenType.OPERATOR and self.current.value in BINARY_OPERATORS:
            operator = BINARY_OPERATORS[self.current.value]
            if operator.precedence < min_precedence:
                break
            self._advance()
            next_min = operator.precedence if operator.right_assoc else operator.precedence + 1
            right = self._parse_binary(next_min)
            left = [operator.output, left, right]
        return left

    def _parse_unary(self) -> Any:
        token = self.current
        if token.type is TokenType.OPERATOR and token.value in UNARY_OPERATORS:
            self._advance()
            operand = self._parse_binary(UNARY_OPERAND_PRECEDENCE)
            if token.value == "-" and isinstance(operand, (int, float)):
                return -operand
            return [UNARY_OPERATORS[token.value], operand]
        return self._parse_primary()

    def _parse_primary(self) -> Any:
        token = self.current

        if token.type in (TokenType.NUMBER, TokenType.STRING):
            self._advance()
            return token.value

        if token.type is TokenType.IDENT:
            self._advance()
            if self.current.type is TokenType.LPAREN:
                return self._parse_call(token.value)
            return [PROPERTY_LOOKUP, token.value]

        if token.type is TokenType.LPAREN:
            self._advance()
            inner = self._parse_binary(0)
            self._expect(TokenType.RPAREN, "Unbalanced parentheses: expected ')'")
            return inner

        if token.type is TokenType.EOF:
            raise self._error("Unexpected end of expression", token)
        raise self._error(f"Unexpected token {token.describe()}", token)

    def _parse_call(self, name: str) -> List[Any]:
        self._expect(TokenType.LPAREN, f"Expected '(' after {name}")
        call: List[Any] = [name]
        if self.current.type is TokenType.RPAREN:
            self._advance()
            return call
        while True:
            call.append(self._parse_binary(0))
            if self.current.type is TokenType.COMMA:
                self._advance()
                continue
            self._expect(TokenType.RPAREN, f"Unbalanced parentheses: expected ',' or ')' in call to {name}")
            return call


def parse(source: str) -> Any:
    return Parser(source).parse()
