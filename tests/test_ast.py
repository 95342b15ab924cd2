import dataclasses
import json

import pytest
from conftest import EXERCISE, parse_source

from yelang.yelang_ast import (
    Assignment,
    BinaryExpression,
    Condition,
    ElseIfClause,
    Identifier,
    If,
    NumberLiteral,
    Print,
    Program,
    StringLiteral,
    VarDeclaration,
    While,
)


def test_nodes_compare_structurally() -> None:
    n1 = VarDeclaration("x", NumberLiteral(1))
    n2 = VarDeclaration("x", NumberLiteral(1))
    assert n1 == n2
    assert n1 != VarDeclaration("x", NumberLiteral(2))
    assert n1 != Assignment("x", NumberLiteral(1))


def test_nodes_are_frozen() -> None:
    node = Print(Identifier("x"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.value = Identifier("y")  # type: ignore[misc]


def test_nodes_are_hashable() -> None:
    program = parse_source(EXERCISE)
    assert hash(program) == hash(parse_source(EXERCISE))


def test_if_defaults() -> None:
    node = If(Condition(Identifier("a"), "<", NumberLiteral(1)), ())
    assert node.else_if_clauses == ()
    assert node.else_body is None


def test_to_dict_literals() -> None:
    assert NumberLiteral(5).to_dict() == {"kind": "NumberLiteral", "value": 5}
    assert StringLiteral("hi").to_dict() == {"kind": "StringLiteral", "value": "hi"}
    assert Identifier("x").to_dict() == {"kind": "Identifier", "name": "x"}


def test_to_dict_binary_expression() -> None:
    d = BinaryExpression("*", Identifier("x"), NumberLiteral(2)).to_dict()
    assert d["kind"] == "BinaryExpression"
    assert d["operator"] == "*"
    assert d["left"] == {"kind": "Identifier", "name": "x"}
    assert d["right"] == {"kind": "NumberLiteral", "value": 2}


def test_to_dict_if_statement() -> None:
    cond = Condition(Identifier("x"), ">", NumberLiteral(1))
    node = If(cond, (Print(Identifier("x")),), (ElseIfClause(cond, ()),), None)
    d = node.to_dict()
    assert d["kind"] == "If"
    assert d["condition"]["operator"] == ">"
    assert d["then_body"] == [{"kind": "Print", "value": {"kind": "Identifier", "name": "x"}}]
    assert d["else_if_clauses"][0]["kind"] == "ElseIfClause"
    assert d["else_body"] is None


def test_to_dict_while_and_program() -> None:
    loop = While(Condition(Identifier("i"), "<", NumberLiteral(3)), ())
    d = Program((loop,)).to_dict()
    assert d["kind"] == "Program"
    assert d["statements"][0]["kind"] == "While"
    assert d["statements"][0]["body"] == []


def test_to_dict_is_json_serializable() -> None:
    d = parse_source(EXERCISE).to_dict()
    assert json.loads(json.dumps(d)) == d
