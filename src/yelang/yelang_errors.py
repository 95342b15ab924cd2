"""
Error taxonomy for the yelang toolchain.

Every failure raised by the lexer, parser, keyword table, or emitter derives from
`YelangError`, so a driver can catch one type and report it. Each class also
derives from the builtin exception that describes the same situation
(`SyntaxError`, `ValueError`, `NotImplementedError`), so callers written against
builtins keep working.

Classes:
    - YelangError: Base class for all toolchain failures.
    - LexError: Unrecognized character or unterminated string literal.
    - ParseError: Unexpected or missing token during parsing.
    - UnsupportedTargetError: No descriptor is registered for a target identifier.
    - UnsupportedNodeError: The emitter has no rendering rule for a node kind.
    - KeywordTableError: Invalid or conflicting keyword configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from yelang.yelang_lexer import Token


class YelangError(Exception):
    """Base class for every error raised by the yelang core."""


class LexError(YelangError, SyntaxError):
    """Raised when the lexer meets a character it cannot tokenize.

    Attributes:
        char (str): The offending character (the opening quote for unterminated strings).
        offset (int): UTF-8 byte offset of the offending character in the source.
        line (int): 1-based line number.
        col (int): 1-based column number.
    """

    def __init__(self, message: str, char: str, offset: int, line: int, col: int):
        super().__init__(message)
        self.char = char
        self.offset = offset
        self.line = line
        self.col = col


class ParseError(YelangError, SyntaxError):
    """Raised on the first unexpected or missing token.

    Attributes:
        expected (str): Description of the token kind(s) the grammar required.
        actual (str): Kind of the token actually found (``EOF`` at end of input).
        token (Token | None): The offending token, if any.
    """

    def __init__(
        self,
        message: str,
        expected: str,
        actual: str,
        token: Token | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual
        self.token = token


class UnsupportedTargetError(YelangError, ValueError):
    """Raised when a target identifier has no registered descriptor."""

    def __init__(self, target: str, available: list[str]):
        super().__init__(
            f"Unknown transpilation target: {target!r} "
            f"(available: {', '.join(available)})"
        )
        self.target = target
        self.available = available


class UnsupportedNodeError(YelangError, NotImplementedError):
    """Raised when the emitter meets a node kind it cannot render."""

    def __init__(self, kind: str, target: str):
        super().__init__(f"No rendering rule for node kind {kind!r} on target {target!r}")
        self.kind = kind
        self.target = target


class KeywordTableError(YelangError):
    """Raised when a keyword configuration is invalid.

    Attributes:
        conflicts (list[str]): Human-readable descriptions of alias collisions.

    Example:
        raise KeywordTableError("Alias collision(s) detected", ["'ye' → VAR vs PRINT"])
    """

    def __init__(self, message: str, conflicts: list[str] | None = None):
        super().__init__(message)
        self.conflicts = conflicts or []
