"""
Shared constants for the yelang toolchain.

Token kinds, the default keyword table, and the operator sets recognized by the
lexer and parser live here so that no stage carries its own copy.

Exports:
    - KEYWORD_KINDS
    - DEFAULT_KEYWORDS
    - OPERATOR_CHARS
    - ARITHMETIC_OPERATORS
    - COMPARISON_OPERATORS
    - PRIMARY_TOKENS
"""

from types import MappingProxyType

# Keyword-derived token kinds
VAR = "VAR"
PRINT = "PRINT"
IF = "IF"
ELSE_IF = "ELSE_IF"
ELSE = "ELSE"
WHILE = "WHILE"
LOOP_START = "LOOP_START"

# Structural token kinds
IDENTIFIER = "IDENTIFIER"
NUMBER = "NUMBER"
STRING = "STRING"
OPERATOR = "OPERATOR"
SEMICOLON = "SEMICOLON"
OPEN_BRACE = "OPEN_BRACE"
CLOSE_BRACE = "CLOSE_BRACE"
EOF = "EOF"

KEYWORD_KINDS: tuple[str, ...] = (
    VAR,
    PRINT,
    IF,
    ELSE_IF,
    ELSE,
    WHILE,
    LOOP_START,
)

DEFAULT_KEYWORDS: MappingProxyType[str, str] = MappingProxyType(
    {
        "ye": VAR,
        "bol": PRINT,
        "agar": IF,
        "yafir": ELSE_IF,
        "varna": ELSE,
        "jabtak": WHILE,
        "tabtak": LOOP_START,
    }
)

OPERATOR_CHARS = frozenset("=+-*/<>")

PUNCTUATION: MappingProxyType[str, str] = MappingProxyType(
    {
        ";": SEMICOLON,
        "{": OPEN_BRACE,
        "}": CLOSE_BRACE,
    }
)

QUOTES = frozenset("\"'")

ASSIGN_OPERATOR = "="
ARITHMETIC_OPERATORS = frozenset({"+", "-", "*", "/"})
COMPARISON_OPERATORS = frozenset({"==", "<", ">", "<=", ">="})

PRIMARY_TOKENS = frozenset({NUMBER, STRING, IDENTIFIER})

# Value kinds derived from expressions for typed declarations and print formats
STRING_VALUE = "string"
NUMBER_VALUE = "number"
