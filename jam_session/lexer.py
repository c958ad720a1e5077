"""
Jam Session lexer.

Splits an expression string into tokens:

    get("width") + 3
    IDENT LPAREN STRING RPAREN OPERATOR NUMBER EOF

Whitespace is insignificant and never produces a token.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, List

from exceptions import ExpressionSyntaxError


class TokenType(Enum):
    NUMBER = "number"
    STRING = "string"
    IDENT = "identifier"
    OPERATOR = "operator"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    EOF = "end of expression"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Any
    position: int

    def describe(self) -> str:
        """Human-readable form for error messages."""
        if self.type is TokenType.EOF:
            return "end of expression"
        if self.type is TokenType.STRING:
            return f"string {self.value!r}"
        return f"'{self.value}'"


# Longest first so "<=" wins over "<"
OPERATORS = ("<=", ">=", "==", "!=", "&&", "||", "+", "-", "*", "/", "%", "^", "<", ">", "!")

_NUMBER = re.compile(r"(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", "'": "'", '"': '"'}
_PUNCTUATION = {"(": TokenType.LPAREN, ")": TokenType.RPAREN, ",": TokenType.COMMA}


class Lexer:
    """Single-pass tokenizer over an expression string."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while True:
            token = self._next_token()
            tokens.append(token)
            if token.type is TokenType.EOF:
                return tokens

    def _error(self, message: str, position: int) -> ExpressionSyntaxError:
        return ExpressionSyntaxError(message, self.source, position)

    def _next_token(self) -> Token:
        source = self.source
        while self.pos < len(source) and source[self.pos].isspace():
            self.pos += 1
        if self.pos >= len(source):
            return Token(TokenType.EOF, None, self.pos)

        start = self.pos
        char = source[start]

        if char in _PUNCTUATION:
            self.pos += 1
            return Token(_PUNCTUATION[char], char, start)

        if char in "\"'":
            return self._read_string(char)

        match = _NUMBER.match(source, start)
        if match:
            self.pos = match.end()
            text = match.group(0)
            is_integral = "." not in text and "e" not in text.lower()
            return Token(TokenType.NUMBER, int(text) if is_integral else float(text), start)

        match = _IDENT.match(source, start)
        if match:
            self.pos = match.end()
            return Token(TokenType.IDENT, match.group(0), start)

        for operator in OPERATORS:
            if source.startswith(operator, start):
                self.pos += len(operator)
                return Token(TokenType.OPERATOR, operator, start)

        raise self._error(f"Unexpected character {char!r}", start)

    def _read_string(self, quote: str) -> Token:
        start = self.pos
        self.pos += 1
        chars: List[str] = []
        while self.pos < len(self.source):
            char = self.source[self.pos]
            if char == quote:
                self.pos += 1
                return Token(TokenType.STRING, "".join(chars), start)
            if char == "\\" and self.pos + 1 < len(self.source):
                escaped = self.source[self.pos + 1]
                chars.append(_ESCAPES.get(escaped, escaped))
                self.pos += 2
                continue
            chars.append(char)
            self.pos += 1
        raise self._error("Unterminated string literal", start)


def tokenize(source: str) -> List[Token]:
    return Lexer(source).tokenize()
