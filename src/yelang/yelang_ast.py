"""
Defines the abstract syntax tree (AST) for the yelang scripting language.

The AST is a closed set of node variants, each an immutable (frozen) dataclass.
Sequences are stored as tuples, so a tree cannot be changed once the parser has
built it and can be shared freely between emitters.

Statements:
    VarDeclaration, Assignment, ExpressionStatement, Print, If, While

Expressions:
    NumberLiteral, StringLiteral, Identifier, BinaryExpression

Other nodes:
    Program (root), Condition (the single comparison of `if`/`while`),
    ElseIfClause (one `yafir` branch of an `If`)

A BinaryExpression's operands are primaries (literals or identifiers) only; the
grammar allows at most one binary operation per expression, and a Condition is
always exactly one comparison.

Every node converts to plain data via `to_dict()`, typed by `ASTDict`, for JSON
output and debugging.

Example:
    Program((VarDeclaration("x", NumberLiteral(5)), Print(Identifier("x"))))
"""

from dataclasses import dataclass
from typing import Any, TypedDict, Union


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of a node used for serialization.

    Fields:
        kind (str): Node class name (e.g. "Print", "If").
        value (Any): Literal payload for NumberLiteral / StringLiteral.
        name (str): Bound name for declarations, assignments and identifiers.
        operator (str): Operator spelling of a binary expression or condition.
        left (ASTDict): Left operand.
        right (ASTDict): Right operand.
        initializer (ASTDict): Value of a declaration.
        expression (ASTDict): Expression of an expression statement.
        condition (ASTDict): Condition of an if / else-if / while.
        statements (list[ASTDict]): Top-level program statements.
        then_body (list[ASTDict]): Statements of the `if` branch.
        else_if_clauses (list[ASTDict]): Else-if branches.
        else_body (list[ASTDict] | None): Statements of the `else` branch.
        body (list[ASTDict]): Statements of a loop or else-if branch.
    """

    kind: str
    value: Any
    name: str
    operator: str
    left: "ASTDict"
    right: "ASTDict"
    initializer: "ASTDict"
    expression: "ASTDict"
    condition: "ASTDict"
    statements: list["ASTDict"]
    then_body: list["ASTDict"]
    else_if_clauses: list["ASTDict"]
    else_body: list["ASTDict"] | None
    body: list["ASTDict"]


@dataclass(frozen=True)
class NumberLiteral:
    value: int

    def to_dict(self) -> ASTDict:
        return {"kind": "NumberLiteral", "value": self.value}


@dataclass(frozen=True)
class StringLiteral:
    """A string literal; `value` is the raw text between the quotes."""

    value: str

    def to_dict(self) -> ASTDict:
        return {"kind": "StringLiteral", "value": self.value}


@dataclass(frozen=True)
class Identifier:
    name: str

    def to_dict(self) -> ASTDict:
        return {"kind": "Identifier", "name": self.name}


Primary = Union[NumberLiteral, StringLiteral, Identifier]


@dataclass(frozen=True)
class BinaryExpression:
    """One arithmetic operation between two primaries."""

    operator: str
    left: Primary
    right: Primary

    def to_dict(self) -> ASTDict:
        return {
            "kind": "BinaryExpression",
            "operator": self.operator,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


Expression = Union[NumberLiteral, StringLiteral, Identifier, BinaryExpression]


@dataclass(frozen=True)
class Condition:
    """Exactly one comparison between two primaries."""

    left: Primary
    operator: str
    right: Primary

    def to_dict(self) -> ASTDict:
        return {
            "kind": "Condition",
            "operator": self.operator,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


@dataclass(frozen=True)
class VarDeclaration:
    name: str
    initializer: Expression

    def to_dict(self) -> ASTDict:
        return {
            "kind": "VarDeclaration",
            "name": self.name,
            "initializer": self.initializer.to_dict(),
        }


@dataclass(frozen=True)
class Assignment:
    name: str
    value: Expression

    def to_dict(self) -> ASTDict:
        return {"kind": "Assignment", "name": self.name, "value": self.value.to_dict()}


@dataclass(frozen=True)
class ExpressionStatement:
    expression: Expression

    def to_dict(self) -> ASTDict:
        return {"kind": "ExpressionStatement", "expression": self.expression.to_dict()}


@dataclass(frozen=True)
class Print:
    value: Expression

    def to_dict(self) -> ASTDict:
        return {"kind": "Print", "value": self.value.to_dict()}


@dataclass(frozen=True)
class ElseIfClause:
    condition: Condition
    body: tuple["Statement", ...]

    def to_dict(self) -> ASTDict:
        return {
            "kind": "ElseIfClause",
            "condition": self.condition.to_dict(),
            "body": [s.to_dict() for s in self.body],
        }


@dataclass(frozen=True)
class If:
    """An if statement with any number of else-if clauses and an optional else.

    `else_body` is None when there is no `varna` branch; an empty tuple means the
    branch is present but holds no statements.
    """

    condition: Condition
    then_body: tuple["Statement", ...]
    else_if_clauses: tuple[ElseIfClause, ...] = ()
    else_body: tuple["Statement", ...] | None = None

    def to_dict(self) -> ASTDict:
        return {
            "kind": "If",
            "condition": self.condition.to_dict(),
            "then_body": [s.to_dict() for s in self.then_body],
            "else_if_clauses": [c.to_dict() for c in self.else_if_clauses],
            "else_body": (
                None if self.else_body is None else [s.to_dict() for s in self.else_body]
            ),
        }


@dataclass(frozen=True)
class While:
    condition: Condition
    body: tuple["Statement", ...]

    def to_dict(self) -> ASTDict:
        return {
            "kind": "While",
            "condition": self.condition.to_dict(),
            "body": [s.to_dict() for s in self.body],
        }


Statement = Union[VarDeclaration, Assignment, ExpressionStatement, Print, If, While]


@dataclass(frozen=True)
class Program:
    statements: tuple[Statement, ...] = ()

    def to_dict(self) -> ASTDict:
        return {"kind": "Program", "statements": [s.to_dict() for s in self.statements]}


__all__ = [
    "ASTDict",
    "Assignment",
    "BinaryExpression",
    "Condition",
    "ElseIfClause",
    "Expression",
    "ExpressionStatement",
    "Identifier",
    "If",
    "NumberLiteral",
    "Primary",
    "Print",
    "Program",
    "Statement",
    "StringLiteral",
    "VarDeclaration",
    "While",
]
