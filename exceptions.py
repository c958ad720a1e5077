"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Expression syntax errors (bad Jam Session input from the caller)
3. Configuration errors (bad environment)

Host rejections (e.g. removing a layer the map does not have) are NOT
raised here - the host reports those through its own 'error' event.

"""

from typing import Optional


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These indicate:
    - Wrong types passed to functions
    - A properties argument that is not a mapping
    - A source argument that is neither a mapping nor a string

    These should NEVER be caught and handled - they indicate bugs
    that need to be fixed in the calling code.

    Examples:
        - build_style(["line-width", 3]) instead of build_style({...})
        - infer_source(42)
    """
    pass


class ExpressionSyntaxError(SyntaxError):
    """
    Jam Session expression is not well formed.

    Subclasses the built-in SyntaxError so callers can catch either.
    Carries the original expression text and the 0-based character
    offset where parsing failed.

    Examples:
        - Empty expression
        - Unbalanced parentheses: "(2 + 3"
        - Unexpected token: "2 + * 3"
        - Unterminated string: 'get("width)'
    """

    def __init__(self, message: str, source: str = "", position: Optional[int] = None):
        self.source = source
        self.position = position
        if position is not None:
            message = f"{message} at position {position}"
        # offset is 1-based for SyntaxError
        super().__init__(
            message,
            ("<jam-session>", 1, (position or 0) + 1, source)
        )


class ConfigurationError(Exception):
    """
    System configuration error.

    These are typically fatal and indicate misconfiguration
    that prevents the library from operating.

    Examples:
        - Empty vector scheme list
        - Non-positive raster tile size
        - Unknown log level name
    """
    pass
