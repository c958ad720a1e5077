"""
Jam Session - a small expression language for map style expressions.

Compiles infix expressions into the host's prefix-array form, so style
values can be written the way they read:

    from jam_session import jam

    jam("2 + 2")                     # ["+", 2, 2]
    jam('get("width") + 3')          # ["+", ["get", "width"], 3]
    jam("population / area > 100")   # [">", ["/", ["get", "population"], ["get", "area"]], 100]

The result is a plain nested list of strings and numbers and can be used
directly as any paint/layout value or filter.
"""

from typing import Any

from exceptions import ContractViolationError, ExpressionSyntaxError
from util_logger import ComponentType, LoggerFactory, log_exceptions
from .lexer import Lexer, Token, TokenType, tokenize
from .parser import BINARY_OPERATORS, UNARY_OPERATORS, BinaryOperator, Parser, parse

logger = LoggerFactory.create_logger(ComponentType.COMPILER, "JamSession")


@log_exceptions(logger=logger)
def compile(source: str) -> Any:
    """
    Compile a Jam Session expression.

    Args:
        source: Expression text

    Returns:
        Nested list expression (or a bare literal for e.g. "42")

    Raises:
        ExpressionSyntaxError: If source is not a well-formed expression
        ContractViolationError: If source is not a string
    """
    if not isinstance(source, str):
        raise ContractViolationError(
            f"Expression source must be a string, got {type(source).__name__}"
        )
    expression = Parser(source).parse()
    logger.debug(f"Compiled expression {source!r}")
    return expression


jam = compile

__all__ = [
    "compile",
    "jam",
    "parse",
    "tokenize",
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "BinaryOperator",
    "BINARY_OPERATORS",
    "UNARY_OPERATORS",
    "ExpressionSyntaxError",
]
