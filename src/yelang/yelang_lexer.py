"""
Lexical analyzer for the yelang scripting language.

This module provides core components for converting raw source text into token sequences:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Immutable lexical unit with kind, payload, source spelling and location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Functions:
    tokenize: Lex a whole source text into a list of tokens.

Features:
    - Skips whitespace
    - Recognizes:
        * Keywords (through a `KeywordTable`) and identifiers
        * Non-negative integer numbers
        * Single- or double-quoted strings, passed through without escape processing
        * One-character operators, extended to two characters when followed by `=`
        * `;`, `{` and `}`

Raises:
    LexError: On any unrecognized character or an unterminated string literal.

Example:
    >>> [tok.type for tok in tokenize("ye x = 5;")]
    ['VAR', 'IDENTIFIER', 'OPERATOR', 'NUMBER', 'SEMICOLON']

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

import logging
from dataclasses import dataclass

from yelang.yelang_constants import (
    EOF,
    IDENTIFIER,
    NUMBER,
    OPERATOR,
    OPERATOR_CHARS,
    PUNCTUATION,
    QUOTES,
    STRING,
)
from yelang.yelang_errors import LexError
from yelang.yelang_keywords import KeywordTable

logger = logging.getLogger(__name__)


class CharacterStream:
    """Cursor over yelang source text.

    The lexer pulls one character at a time and reads `line`/`column` before
    each token to stamp its start position. Newlines bump `line` and reset
    `column`; `position` is a character index, and `byte_offset` converts it for
    error reports.
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """Takes one character and moves the cursor past it.

        The lexer checks `end_of_file` first, so calling this on an exhausted
        stream is a lexer bug and raises `EOFError`.
        """
        if self.position >= len(self.source):
            raise EOFError(f"no character left at {self.line}:{self.column}")
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Looks ahead without moving; "" past either end, which never matches a token class."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        """True once every character has been taken."""
        return self.position >= len(self.source)

    def byte_offset(self, position: int | None = None) -> int:
        """Returns the UTF-8 byte offset of a character index (default: the current one)."""
        index = self.position if position is None else position
        return len(self.source[:index].encode("utf-8"))


@dataclass(frozen=True)
class Token:
    """Represents a single lexical token.

    Attributes:
        type (str): The token kind (e.g. 'VAR', 'IDENTIFIER', 'NUMBER', 'EOF').
        value (str): The payload: the word, digit run, unquoted string content or operator.
        text (str): The exact source spelling, quotes included for strings.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
        offset (int): The 0-based character index where the token starts.
    """

    type: str
    value: str
    text: str = ""
    line: int = 0
    col: int = 0
    offset: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r})"


class Lexer:
    """Lexical analyzer for yelang.

    The Lexer takes a CharacterStream and a KeywordTable and produces Token
    objects one at a time. `next_token()` returns an ``EOF`` sentinel once the
    input is exhausted.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        keywords (KeywordTable): Spelling → keyword kind table.
    """

    def __init__(self, stream: CharacterStream, keywords: KeywordTable | None = None) -> None:
        self.stream = stream
        self.keywords = keywords if keywords is not None else KeywordTable.default()

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek().isspace():
            self.advance()

    def error(self, message: str, char: str, position: int, line: int, col: int) -> LexError:
        offset = self.stream.byte_offset(position)
        return LexError(
            f"{message} at offset {offset} (line {line}, col {col})",
            char=char,
            offset=offset,
            line=line,
            col=col,
        )

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Raises:
            LexError: On an unrecognized character or unterminated string literal.
        """
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        start = self.stream.position

        if self.stream.end_of_file():
            return Token(EOF, EOF, "", line, col, start)

        ch = self.peek()

        # 1. Keyword or identifier
        if ch.isascii() and ch.isalpha():
            word = ""
            while self.peek().isascii() and self.peek().isalnum():
                word += self.advance()
            kind = self.keywords.lookup(word) or IDENTIFIER
            return Token(kind, word, word, line, col, start)

        # 2. Number
        if ch.isascii() and ch.isdigit():
            digits = ""
            while self.peek().isascii() and self.peek().isdigit():
                digits += self.advance()
            return Token(NUMBER, digits, digits, line, col, start)

        # 3. String, raw content up to the matching quote
        if ch in QUOTES:
            quote = self.advance()
            content = ""
            while not self.stream.end_of_file() and self.peek() != quote:
                content += self.advance()
            if self.stream.end_of_file():
                raise self.error("Unterminated string literal", quote, start, line, col)
            self.advance()
            return Token(STRING, content, f"{quote}{content}{quote}", line, col, start)

        # 4. Operator, optionally followed by '='
        if ch in OPERATOR_CHARS:
            op = self.advance()
            if self.peek() == "=":
                op += self.advance()
            return Token(OPERATOR, op, op, line, col, start)

        # 5. Punctuation
        if ch in PUNCTUATION:
            self.advance()
            return Token(PUNCTUATION[ch], ch, ch, line, col, start)

        raise self.error(f"Unexpected character {ch!r}", ch, start, line, col)


def tokenize(source: str, keywords: KeywordTable | None = None) -> list[Token]:
    """Lexes `source` into the full token sequence (without the EOF sentinel).

    Raises:
        LexError: On the first character that cannot be tokenized.
    """
    lexer = Lexer(CharacterStream(source), keywords)
    tokens: list[Token] = []
    while True:
        tok = lexer.next_token()
        if tok.type == EOF:
            break
        tokens.append(tok)
    logger.debug("Lexed %d token(s) from %d character(s)", len(tokens), len(source))
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
