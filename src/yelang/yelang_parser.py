"""
yelang Parser

Parses the token sequence produced by the lexer into a `Program` AST.

The parser is a recursive-descent parser with one token of lookahead. It consumes
the entire token sequence and either returns the tree or raises `ParseError` on
the first problem; there is no resynchronization and no error aggregation.

Grammar
-------
    program   := statement*
    statement := varDecl | printStmt | ifStmt | whileStmt | idStmt
    varDecl   := VAR IDENTIFIER '=' expr ';'?
    printStmt := PRINT expr ';'?
    ifStmt    := IF condition block (ELSE_IF condition block)* (ELSE block)?
    whileStmt := WHILE condition LOOP_START? block
    idStmt    := IDENTIFIER ('=' expr)? ';'?
    block     := '{' statement* '}' | statement
    condition := primary COMPARISON primary
    expr      := primary (ARITHMETIC primary)?
    primary   := NUMBER | STRING | IDENTIFIER

Parser Behavior
---------------
- Semicolons are optional everywhere and consumed when present.
- An un-braced block holds exactly one statement.
- The `tabtak` loop-start marker after a `jabtak` condition is optional and discarded.
- Expressions hold at most one arithmetic operation (`+ - * /`); any other
  operator ends the expression.
- Conditions hold exactly one comparison (`== < > <= >=`).
- In strict mode (the default) a token that cannot start a statement raises
  `ParseError`. With ``strict=False`` such tokens are skipped and logged at
  debug level.

Raises
------
ParseError
    Raised with the expected and actual token kinds when the input does not
    match the grammar.
"""

from __future__ import annotations

import logging

from yelang.yelang_ast import (
    Assignment,
    BinaryExpression,
    Condition,
    ElseIfClause,
    Expression,
    ExpressionStatement,
    Identifier,
    If,
    NumberLiteral,
    Primary,
    Print,
    Program,
    Statement,
    StringLiteral,
    VarDeclaration,
    While,
)
from yelang.yelang_constants import (
    ARITHMETIC_OPERATORS,
    ASSIGN_OPERATOR,
    CLOSE_BRACE,
    COMPARISON_OPERATORS,
    ELSE,
    ELSE_IF,
    EOF,
    IDENTIFIER,
    IF,
    LOOP_START,
    NUMBER,
    OPEN_BRACE,
    OPERATOR,
    PRIMARY_TOKENS,
    PRINT,
    SEMICOLON,
    STRING,
    VAR,
    WHILE,
)
from yelang.yelang_errors import ParseError
from yelang.yelang_lexer import Token

logger = logging.getLogger(__name__)

STATEMENT_STARTS = (VAR, PRINT, IF, WHILE, IDENTIFIER)


class Parser:
    """
    yelang Parser Class

    Transforms a list of tokens into a `Program`.

    Attributes
    ----------
    tokens : list[Token]
        The input token sequence. A trailing EOF sentinel is optional.
    position : int
        Current index into the token sequence.
    strict : bool
        When True, tokens that cannot begin a statement raise `ParseError`;
        when False they are skipped.

    Methods
    -------
    parse() -> Program
        Parse the complete token sequence.
    parse_statement() -> Statement | None
        Parse one statement.
    parse_block() -> tuple[Statement, ...]
        Parse a braced block or a single un-braced statement.
    parse_condition() -> Condition
        Parse one comparison between two primaries.
    parse_expression() -> Expression
        Parse a primary with at most one arithmetic operation.
    parse_primary() -> Primary
        Parse a number, string or identifier.
    """

    def __init__(self, tokens: list[Token], strict: bool = True) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.strict: bool = strict

    def current(self) -> Token:
        return (
            self.tokens[self.position]
            if self.position < len(self.tokens)
            else Token(EOF, EOF)
        )

    def advance(self) -> Token:
        tok = self.current()
        self.position += 1
        return tok

    def at_end(self) -> bool:
        return self.current().type == EOF

    def check(self, type_: str, value: str | None = None) -> bool:
        tok = self.current()
        return tok.type == type_ and (value is None or tok.value == value)

    def error(self, expected: str, tok: Token | None = None) -> ParseError:
        tok = tok or self.current()
        location = f" (line {tok.line}, col {tok.col})" if tok.line else ""
        found = tok.type if tok.type == EOF else f"{tok.type} {tok.value!r}"
        return ParseError(
            f"Expected {expected}, got {found}{location}",
            expected=expected,
            actual=tok.type,
            token=tok,
        )

    def match(self, type_: str, value: str | None = None) -> Token:
        """Consumes the current token if it has the given kind (and value), else raises."""
        if self.check(type_, value):
            return self.advance()
        expected = type_ if value is None else f"{type_} {value!r}"
        raise self.error(expected)

    def optional(self, type_: str) -> Token | None:
        if self.check(type_):
            return self.advance()
        return None

    def parse(self) -> Program:
        """Parse the whole token sequence into a Program."""
        statements: list[Statement] = []
        while not self.at_end():
            node = self.parse_statement()
            if node is not None:
                statements.append(node)
        logger.debug("Parsed %d top-level statement(s)", len(statements))
        return Program(tuple(statements))

    def parse_statement(self) -> Statement | None:
        """Parse a single statement.

        Returns None only in permissive mode, after skipping a token that cannot
        begin a statement.
        """
        tok = self.current()

        if tok.type == VAR:
            return self.parse_var_declaration()
        if tok.type == PRINT:
            return self.parse_print()
        if tok.type == IF:
            return self.parse_if()
        if tok.type == WHILE:
            return self.parse_while()
        if tok.type == IDENTIFIER:
            return self.parse_identifier_statement()

        if self.strict or tok.type == EOF:
            raise self.error("start of statement (" + ", ".join(STATEMENT_STARTS) + ")")
        logger.debug("Skipping token %r at line %d, col %d", tok, tok.line, tok.col)
        self.advance()
        return None

    def parse_var_declaration(self) -> VarDeclaration:
        self.match(VAR)
        name = self.match(IDENTIFIER)
        self.match(OPERATOR, ASSIGN_OPERATOR)
        initializer = self.parse_expression()
        self.optional(SEMICOLON)
        return VarDeclaration(name.value, initializer)

    def parse_print(self) -> Print:
        self.match(PRINT)
        value = self.parse_expression()
        self.optional(SEMICOLON)
        return Print(value)

    def parse_if(self) -> If:
        """Parse `agar` with its `yafir` clauses and optional `varna` branch."""
        self.match(IF)
        condition = self.parse_condition()
        then_body = self.parse_block()

        clauses: list[ElseIfClause] = []
        while self.check(ELSE_IF):
            self.advance()
            clause_condition = self.parse_condition()
            clauses.append(ElseIfClause(clause_condition, self.parse_block()))

        else_body = None
        if self.check(ELSE):
            self.advance()
            else_body = self.parse_block()

        return If(condition, then_body, tuple(clauses), else_body)

    def parse_while(self) -> While:
        self.match(WHILE)
        condition = self.parse_condition()
        self.optional(LOOP_START)
        return While(condition, self.parse_block())

    def parse_identifier_statement(self) -> Assignment | ExpressionStatement:
        name = self.match(IDENTIFIER)
        if self.check(OPERATOR, ASSIGN_OPERATOR):
            self.advance()
            value = self.parse_expression()
            self.optional(SEMICOLON)
            return Assignment(name.value, value)
        self.optional(SEMICOLON)
        return ExpressionStatement(Identifier(name.value))

    def parse_block(self) -> tuple[Statement, ...]:
        """Parse `{ statement* }`, or exactly one un-braced statement."""
        if not self.check(OPEN_BRACE):
            statement = self.parse_statement()
            return (statement,) if statement is not None else ()

        self.advance()
        statements: list[Statement] = []
        while not self.check(CLOSE_BRACE):
            if self.at_end():
                raise self.error(CLOSE_BRACE)
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
        self.advance()
        return tuple(statements)

    def parse_condition(self) -> Condition:
        left = self.parse_primary()
        tok = self.current()
        if tok.type != OPERATOR or tok.value not in COMPARISON_OPERATORS:
            raise self.error(
                "comparison operator (" + " ".join(sorted(COMPARISON_OPERATORS)) + ")"
            )
        self.advance()
        right = self.parse_primary()
        return Condition(left, tok.value, right)

    def parse_expression(self) -> Expression:
        left = self.parse_primary()
        tok = self.current()
        if tok.type == OPERATOR and tok.value in ARITHMETIC_OPERATORS:
            self.advance()
            right = self.parse_primary()
            return BinaryExpression(tok.value, left, right)
        return left

    def parse_primary(self) -> Primary:
        tok = self.current()
        if tok.type not in PRIMARY_TOKENS:
            raise self.error(" or ".join((NUMBER, STRING, IDENTIFIER)))
        self.advance()
        if tok.type == NUMBER:
            return NumberLiteral(int(tok.value))
        if tok.type == STRING:
            return StringLiteral(tok.value)
        return Identifier(tok.value)


def parse(tokens: list[Token], strict: bool = True) -> Program:
    """Parse a token sequence into a Program.

    Raises:
        ParseError: On the first token that does not fit the grammar.
    """
    return Parser(tokens, strict=strict).parse()


__all__ = ["Parser", "parse"]
