"""
Renders a yelang `Program` into target-language source text.

This module defines the `GenericEmitter` class: one tree walker shared by every
target. Everything that differs between targets (terminators, block syntax,
declaration and print forms, string quoting, operator spellings, indentation)
is read from the `TargetDescriptor` the emitter is constructed with.

Behavior:
    - Maintains a line buffer (`lines`) and a nesting depth; each statement line is
      prefixed with `indent_unit * depth`.
    - Wraps the body in the descriptor's prelude and postlude lines.
    - Derives a value kind (string or number) from expressions with one shared
      rule, used for typed declarations and kind-specific print templates.
    - Applies a single `UnsupportedNodePolicy` to nodes it cannot render, including
      string `+` on targets without string concatenation. Under COMMENT the whole
      enclosing statement is replaced by one comment line.

Raises:
    - `UnsupportedNodeError`: Under `UnsupportedNodePolicy.FAIL`, for any node that
      is not part of the closed AST variant set, or that the target cannot express.
"""

import logging
from enum import Enum
from typing import NoReturn

from yelang.emitters.descriptors import BlockStyle, TargetDescriptor
from yelang.yelang_ast import (
    Assignment,
    BinaryExpression,
    Condition,
    Expression,
    ExpressionStatement,
    Identifier,
    If,
    NumberLiteral,
    Print,
    Program,
    Statement,
    StringLiteral,
    VarDeclaration,
    While,
)
from yelang.yelang_constants import NUMBER_VALUE, STRING_VALUE
from yelang.yelang_errors import UnsupportedNodeError

logger = logging.getLogger(__name__)

# node class → suffix of the emit method that renders it
STATEMENT_KINDS: dict[type, str] = {
    VarDeclaration: "var_declaration",
    Assignment: "assignment",
    ExpressionStatement: "expression_statement",
    Print: "print",
    If: "if",
    While: "while",
}

EXPRESSION_KINDS: dict[type, str] = {
    NumberLiteral: "number",
    StringLiteral: "string",
    Identifier: "identifier",
    BinaryExpression: "binary",
}


class UnsupportedNodePolicy(str, Enum):
    """What the emitter does with a node it has no rendering rule for.

    FAIL raises `UnsupportedNodeError`; COMMENT writes a comment line naming the
    node kind and keeps going. The policy belongs to the emitter, never to a
    descriptor, so every target handles unsupported nodes the same way.
    """

    FAIL = "fail"
    COMMENT = "comment"


class GenericEmitter:
    """Emits target code for a Program, driven by a TargetDescriptor.

    Attributes:
        descriptor (TargetDescriptor): Rendering rules of the target.
        policy (UnsupportedNodePolicy): Handling of unsupported node kinds.
        lines (list[str]): Accumulated output lines.
        depth (int): Current nesting level.
        bindings (dict[str, str]): Declared name → value kind, for typing identifiers.

    Methods:
        emit_program(program): Renders a whole program and returns the text.
        emit_statement(node): Appends the lines for one statement via `emit_<kind>`.
        emit_expr(node): Returns the text of an expression via `emit_expr_<kind>`.
        emit_condition(node): Returns the text of a condition.
    """

    def __init__(
        self,
        descriptor: TargetDescriptor,
        policy: UnsupportedNodePolicy = UnsupportedNodePolicy.FAIL,
    ) -> None:
        self.descriptor = descriptor
        self.policy = UnsupportedNodePolicy(policy)
        self.lines: list[str] = []
        self.depth = 0
        self.bindings: dict[str, str] = {}

    def indent_str(self) -> str:
        return self.descriptor.indent_unit * self.depth

    def line(self, text: str) -> None:
        self.lines.append(f"{self.indent_str()}{text}")

    def simple(self, text: str) -> None:
        """Appends a simple statement with the target's terminator."""
        self.line(f"{text}{self.descriptor.terminator}")

    def get_output(self) -> str:
        return "\n".join(self.lines) + "\n"

    def emit_program(self, program: Program) -> str:
        """Renders `program` with the descriptor's prelude and postlude."""
        if not isinstance(program, Program):
            if self.policy is UnsupportedNodePolicy.FAIL:
                self.unsupported(program)
            self.comment_out(type(program).__name__)
            return self.get_output()
        self.lines.extend(self.descriptor.prelude)
        self.depth = self.descriptor.body_level
        self.emit_body(program.statements)
        self.depth = 0
        self.lines.extend(self.descriptor.postlude)
        return self.get_output()

    def emit_body(self, statements: tuple[Statement, ...]) -> None:
        if not statements and self.descriptor.empty_block is not None:
            self.line(self.descriptor.empty_block)
        for statement in statements:
            self.emit_statement(statement)

    def emit_block(self, header: str, statements: tuple[Statement, ...]) -> None:
        """Emits `header`, then the nested statements one level deeper.

        Brace-style blocks are opened here and closed by the caller, so that
        `else` branches can share the closing line (`} else {`).
        """
        if self.descriptor.block_style is BlockStyle.COLON:
            self.line(f"{header}:")
        else:
            self.line(f"{header} {{")
        self.depth += 1
        self.emit_body(statements)
        self.depth -= 1

    def emit_statement(self, node: Statement) -> None:
        """Dispatches a statement node to its `emit_<kind>` method.

        Under the COMMENT policy a statement that holds an unsupported node is
        dropped as a whole and replaced by one comment line.
        """
        mark, depth = len(self.lines), self.depth
        try:
            kind = STATEMENT_KINDS.get(type(node))
            meth = getattr(self, f"emit_{kind}", None) if kind else None
            if meth is None:
                self.unsupported(node)
            else:
                meth(node)
        except UnsupportedNodeError as e:
            if self.policy is UnsupportedNodePolicy.FAIL:
                raise
            del self.lines[mark:]
            self.depth = depth
            self.comment_out(e.kind)

    def emit_var_declaration(self, node: VarDeclaration) -> None:
        d = self.descriptor
        kind = self.value_kind(node.initializer)
        self.bindings[node.name] = kind
        self.simple(
            d.declaration.format(
                type=d.type_names.get(kind, ""),
                name=node.name,
                value=self.emit_expr(node.initializer),
            )
        )

    def emit_assignment(self, node: Assignment) -> None:
        self.simple(
            self.descriptor.assignment.format(name=node.name, value=self.emit_expr(node.value))
        )

    def emit_expression_statement(self, node: ExpressionStatement) -> None:
        self.simple(self.emit_expr(node.expression))

    def emit_print(self, node: Print) -> None:
        template = self.descriptor.print_template(self.value_kind(node.value))
        self.simple(template.format(value=self.emit_expr(node.value)))

    def emit_if(self, node: If) -> None:
        d = self.descriptor
        braces = d.block_style is BlockStyle.BRACES
        self.emit_block(f"{d.if_keyword} {self.emit_condition(node.condition)}", node.then_body)
        for clause in node.else_if_clauses:
            header = f"{d.else_if_keyword} {self.emit_condition(clause.condition)}"
            self.emit_block(f"}} {header}" if braces else header, clause.body)
        if node.else_body is not None:
            self.emit_block(f"}} {d.else_keyword}" if braces else d.else_keyword, node.else_body)
        self.close_block()

    def emit_while(self, node: While) -> None:
        header = f"{self.descriptor.while_keyword} {self.emit_condition(node.condition)}"
        self.emit_block(header, node.body)
        self.close_block()

    def close_block(self) -> None:
        if self.descriptor.block_style is BlockStyle.BRACES:
            self.line("}")

    def emit_condition(self, node: Condition) -> str:
        if not isinstance(node, Condition):
            self.unsupported(node)
        left = self.emit_expr(node.left)
        right = self.emit_expr(node.right)
        return self.descriptor.condition_format.format(
            self.descriptor.binary(node.operator, left, right)
        )

    def emit_expr(self, node: Expression) -> str:
        """Dispatches an expression node to its `emit_expr_<kind>` method."""
        kind = EXPRESSION_KINDS.get(type(node))
        meth = getattr(self, f"emit_expr_{kind}", None) if kind else None
        if meth is None:
            self.unsupported(node)
        return str(meth(node))

    def emit_expr_number(self, node: NumberLiteral) -> str:
        return str(node.value)

    def emit_expr_string(self, node: StringLiteral) -> str:
        return self.descriptor.quote(node.value)

    def emit_expr_identifier(self, node: Identifier) -> str:
        return node.name

    def emit_expr_binary(self, node: BinaryExpression) -> str:
        left = self.emit_expr(node.left)
        right = self.emit_expr(node.right)
        if node.operator != "+" or self.value_kind(node) != STRING_VALUE:
            return self.descriptor.binary(node.operator, left, right)
        rendered = self.descriptor.concatenate(
            self.as_string(node.left, left), self.as_string(node.right, right)
        )
        if rendered is None:
            # target has no string concatenation
            self.unsupported(node)
        return rendered

    def as_string(self, node: Expression, text: str) -> str:
        """Wraps a number operand of a concatenation in the target's conversion."""
        if self.value_kind(node) == STRING_VALUE:
            return text
        return self.descriptor.stringify.format(text)

    def value_kind(self, node: Expression) -> str:
        """Derives STRING or NUMBER from an expression.

        Identifiers take the kind recorded at their declaration (NUMBER if none);
        a binary expression is STRING if either operand is.
        """
        if isinstance(node, StringLiteral):
            return STRING_VALUE
        if isinstance(node, Identifier):
            return self.bindings.get(node.name, NUMBER_VALUE)
        if isinstance(node, BinaryExpression):
            if STRING_VALUE in (self.value_kind(node.left), self.value_kind(node.right)):
                return STRING_VALUE
        return NUMBER_VALUE

    def unsupported(self, node: object) -> NoReturn:
        """Signals a node without a rendering rule; `emit_statement` applies the policy."""
        raise UnsupportedNodeError(type(node).__name__, self.descriptor.name)

    def comment_out(self, kind: str) -> None:
        logger.warning("Unsupported node %s on target %s", kind, self.descriptor.name)
        self.line(f"{self.descriptor.comment_prefix} Unsupported statement type: {kind}")


def emit_program(
    program: Program,
    descriptor: TargetDescriptor,
    policy: UnsupportedNodePolicy = UnsupportedNodePolicy.FAIL,
) -> str:
    """Renders `program` with a fresh emitter, so concurrent calls share no state."""
    return GenericEmitter(descriptor, policy).emit_program(program)


__all__ = ["GenericEmitter", "UnsupportedNodePolicy", "emit_program"]
