"""
Target descriptor table for the generic emitter.

Each supported output language is described by one immutable `TargetDescriptor`:
a declarative record of surface-syntax spellings that the generic emitter reads
while it walks the AST. Adding a target means adding a descriptor here, not
writing another tree walker.

A descriptor supplies:
    - program prelude/postlude lines and the nesting level of top-level statements
    - statement terminator (``""`` or ``";"``)
    - block style: braces with keyword spellings, or colon plus indentation
    - declaration template and, for statically typed targets, type names per value kind
    - print templates per value kind
    - string literal quoting template
    - per-operator translation templates (operators without one are emitted verbatim)
    - string concatenation template (None where the target has no string `+`)
      and the conversion applied to number operands of a concatenation
    - indentation unit and comment prefix

Registered targets: js (default), c, cpp, go, rs, kt, java, py.

Exports:
    - BlockStyle
    - TargetDescriptor
    - TARGETS
    - DEFAULT_TARGET
    - get_descriptor
    - available_targets
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from yelang.yelang_constants import NUMBER_VALUE, STRING_VALUE
from yelang.yelang_errors import UnsupportedTargetError


class BlockStyle(str, Enum):
    BRACES = "braces"
    COLON = "colon"


# a backslash run that ends at a double quote or at the end of the content
_BACKSLASHES_BEFORE_QUOTE = re.compile(r'(\\*)("|\Z)')


def _frozen(mapping: Mapping[str, str] | None = None) -> MappingProxyType[str, str]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True, eq=False)
class TargetDescriptor:
    """Declarative rendering rules for one target language.

    Attributes:
        name (str): Canonical identifier, also the output file extension.
        aliases (tuple[str, ...]): Other identifiers accepted for this target.
        prelude (tuple[str, ...]): Lines emitted before the program body.
        postlude (tuple[str, ...]): Lines emitted after the program body.
        body_level (int): Nesting level of top-level statements.
        indent_unit (str): Whitespace added per nesting level.
        terminator (str): Appended to every simple statement.
        block_style (BlockStyle): Brace-delimited or colon-plus-indentation blocks.
        condition_format (str): Wraps a rendered condition, e.g. ``"({})"``.
        if_keyword (str): Spelling of `if`.
        else_if_keyword (str): Spelling of `else if`.
        else_keyword (str): Spelling of `else`.
        while_keyword (str): Spelling of the condition loop.
        empty_block (str | None): Statement emitted in a block with no statements.
        declaration (str): Template with ``{type}``, ``{name}`` and ``{value}`` fields.
        type_names (Mapping[str, str]): Value kind → static type name; empty when untyped.
        assignment (str): Template with ``{name}`` and ``{value}`` fields.
        print_templates (Mapping[str, str]): Value kind → output call with a ``{value}`` field.
        string_template (str): Quoting template with one ``{}`` field.
        operators (Mapping[str, str]): Operator → template with ``{left}`` and ``{right}``.
        concat (str | None): Template for `+` on strings, with ``{left}`` and ``{right}``;
            None when the target cannot concatenate strings.
        stringify (str): Converts a number operand of a concatenation, one ``{}`` field.
        comment_prefix (str): Line comment marker.
    """

    name: str
    aliases: tuple[str, ...] = ()
    prelude: tuple[str, ...] = ()
    postlude: tuple[str, ...] = ()
    body_level: int = 0
    indent_unit: str = "  "
    terminator: str = ";"
    block_style: BlockStyle = BlockStyle.BRACES
    condition_format: str = "({})"
    if_keyword: str = "if"
    else_if_keyword: str = "else if"
    else_keyword: str = "else"
    while_keyword: str = "while"
    empty_block: str | None = None
    declaration: str = "{name} = {value}"
    type_names: Mapping[str, str] = field(default_factory=_frozen)
    assignment: str = "{name} = {value}"
    print_templates: Mapping[str, str] = field(default_factory=_frozen)
    string_template: str = '"{}"'
    operators: Mapping[str, str] = field(default_factory=_frozen)
    concat: str | None = "{left} + {right}"
    stringify: str = "{}"
    comment_prefix: str = "//"

    @property
    def typed(self) -> bool:
        return bool(self.type_names)

    def print_template(self, kind: str) -> str:
        return self.print_templates.get(kind) or self.print_templates[NUMBER_VALUE]

    def quote(self, raw: str) -> str:
        """Quotes raw string content so the target literal closes where the source one did.

        Backslashes that reach a double quote or the end of the content are
        doubled and the quote itself is escaped; other backslash sequences pass
        through unchanged.
        """
        escaped = _BACKSLASHES_BEFORE_QUOTE.sub(
            lambda m: m.group(1) * 2 + ("\\" + m.group(2) if m.group(2) else ""), raw
        )
        return self.string_template.format(escaped)

    def concatenate(self, left: str, right: str) -> str | None:
        """Renders string `+`, or returns None if the target has no form for it."""
        if self.concat is None:
            return None
        return self.concat.format(left=left, right=right)

    def binary(self, operator: str, left: str, right: str) -> str:
        template = self.operators.get(operator)
        if template is None:
            return f"{left} {operator} {right}"
        return template.format(left=left, right=right)


def _print(template: str) -> MappingProxyType[str, str]:
    return _frozen({NUMBER_VALUE: template, STRING_VALUE: template})


JAVASCRIPT = TargetDescriptor(
    name="js",
    aliases=("javascript",),
    prelude=("// Generated JavaScript code", ""),
    declaration="let {name} = {value}",
    print_templates=_print("console.log({value})"),
    operators=_frozen({"/": "Math.trunc({left} / {right})"}),
)

C = TargetDescriptor(
    name="c",
    prelude=("#include <stdio.h>", "", "int main() {"),
    postlude=("  return 0;", "}"),
    body_level=1,
    declaration="{type} {name} = {value}",
    type_names=_frozen({STRING_VALUE: "char*", NUMBER_VALUE: "int"}),
    print_templates=_frozen(
        {
            NUMBER_VALUE: 'printf("%d\\n", {value})',
            STRING_VALUE: 'printf("%s\\n", {value})',
        }
    ),
    concat=None,
)

CPP = TargetDescriptor(
    name="cpp",
    aliases=("c++", "cxx"),
    prelude=(
        "#include <iostream>",
        "#include <string>",
        "using namespace std;",
        "",
        "int main() {",
    ),
    postlude=("  return 0;", "}"),
    body_level=1,
    declaration="{type} {name} = {value}",
    type_names=_frozen({STRING_VALUE: "string", NUMBER_VALUE: "int"}),
    print_templates=_print("cout << {value} << endl"),
    concat="string({left}) + {right}",
    stringify="to_string({})",
)

GO = TargetDescriptor(
    name="go",
    aliases=("golang",),
    prelude=("package main", "", 'import "fmt"', "", "func main() {"),
    postlude=("}",),
    body_level=1,
    terminator="",
    condition_format="{}",
    while_keyword="for",
    declaration="{name} := {value}",
    print_templates=_print("fmt.Println({value})"),
    stringify="fmt.Sprint({})",
)

RUST = TargetDescriptor(
    name="rs",
    aliases=("rust",),
    prelude=("fn main() {",),
    postlude=("}",),
    body_level=1,
    condition_format="{}",
    declaration="let mut {name} = {value}",
    print_templates=_print('println!("{{}}", {value})'),
    string_template='String::from("{}")',
    concat='format!("{{}}{{}}", {left}, {right})',
)

KOTLIN = TargetDescriptor(
    name="kt",
    aliases=("kotlin",),
    prelude=("fun main() {",),
    postlude=("}",),
    body_level=1,
    indent_unit="    ",
    terminator="",
    declaration="var {name} = {value}",
    print_templates=_print("println({value})"),
    stringify="{}.toString()",
)

JAVA = TargetDescriptor(
    name="java",
    prelude=("public class Main {", "    public static void main(String[] args) {"),
    postlude=("    }", "}"),
    body_level=2,
    indent_unit="    ",
    declaration="{type} {name} = {value}",
    type_names=_frozen({STRING_VALUE: "String", NUMBER_VALUE: "int"}),
    print_templates=_print("System.out.println({value})"),
)

PYTHON = TargetDescriptor(
    name="py",
    aliases=("python",),
    prelude=("def main():",),
    postlude=("", 'if __name__ == "__main__":', "    main()"),
    body_level=1,
    indent_unit="    ",
    terminator="",
    block_style=BlockStyle.COLON,
    condition_format="{}",
    else_if_keyword="elif",
    empty_block="pass",
    print_templates=_print("print({value})"),
    operators=_frozen({"/": "int({left} / {right})"}),
    stringify="str({})",
    comment_prefix="#",
)

DEFAULT_TARGET = JAVASCRIPT.name


def _build_registry(*descriptors: TargetDescriptor) -> MappingProxyType[str, TargetDescriptor]:
    registry: dict[str, TargetDescriptor] = {}
    for descriptor in descriptors:
        for key in (descriptor.name, *descriptor.aliases):
            if key in registry:
                raise ValueError(f"Duplicate target identifier: {key!r}")
            registry[key] = descriptor
    return MappingProxyType(registry)


TARGETS = _build_registry(JAVASCRIPT, C, CPP, GO, RUST, KOTLIN, JAVA, PYTHON)


def available_targets() -> list[str]:
    """Returns the canonical names of all registered targets, in registration order."""
    return list(dict.fromkeys(d.name for d in TARGETS.values()))


def get_descriptor(target: str) -> TargetDescriptor:
    """Looks up a descriptor by name or alias, case-insensitively.

    Raises:
        UnsupportedTargetError: If no descriptor is registered for `target`.
    """
    descriptor = TARGETS.get(target.strip().lower())
    if descriptor is None:
        raise UnsupportedTargetError(target, available_targets())
    return descriptor


__all__ = [
    "BlockStyle",
    "DEFAULT_TARGET",
    "TARGETS",
    "TargetDescriptor",
    "available_targets",
    "get_descriptor",
]
