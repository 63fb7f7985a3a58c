"""Tests for ESTree and Python ast adapters."""

import ast

import pytest

from transform_tools.evaluation import (
    BinaryPlus,
    Call,
    EvalEnvironment,
    Identifier,
    Literal,
    MemberAccess,
    Unsupported,
    evaluate,
    from_estree,
    from_python_ast,
    parse_python_expression,
)


def lit(value, start, end):
    return {"type": "Literal", "value": value, "raw": repr(value), "range": [start, end]}


def ident(name, start, end):
    return {"type": "Identifier", "name": name, "range": [start, end]}


class TestFromEstree:
    """Test ESTree dict conversion."""

    def test_literal_and_span(self) -> None:
        assert from_estree(lit("a", 0, 3)) == Literal("a", span=(0, 3))

    def test_start_end_positions(self) -> None:
        node = {"type": "Identifier", "name": "x", "start": 4, "end": 5}

        assert from_estree(node) == Identifier("x", span=(4, 5))

    def test_no_positions(self) -> None:
        assert from_estree({"type": "Identifier", "name": "x"}).span is None

    def test_utf16_offsets_converted_with_source(self) -> None:
        source = '"\U0001F600\U0001F600" + x'
        node = {
            "type": "BinaryExpression",
            "operator": "+",
            "range": [0, 10],
            "left": lit("\U0001F600\U0001F600", 0, 6),
            "right": ident("x", 9, 10),
        }

        converted = from_estree(node, source)

        assert converted.span == (0, 8)
        assert converted.left.span == (0, 4)
        assert source[slice(*converted.right.span)] == "x"

    def test_offsets_unchanged_for_bmp_source(self) -> None:
        assert from_estree(ident("x", 2, 3), "a x é") == Identifier("x", span=(2, 3))

    def test_regex_literal_unsupported(self) -> None:
        node = {"type": "Literal", "value": {}, "regex": {"pattern": "a", "flags": ""}}

        assert isinstance(from_estree(node), Unsupported)

    def test_member_expression(self) -> None:
        node = {
            "type": "MemberExpression",
            "computed": False,
            "object": ident("path", 0, 4),
            "property": ident("join", 5, 9),
            "range": [0, 9],
        }

        assert from_estree(node) == MemberAccess(Identifier("path", (0, 4)), "join", (0, 9))

    def test_computed_member_with_string(self) -> None:
        node = {
            "type": "MemberExpression",
            "computed": True,
            "object": ident("path", 0, 4),
            "property": lit("join", 5, 11),
        }

        assert from_estree(node).property == "join"

    def test_computed_member_with_identifier_unsupported(self) -> None:
        node = {
            "type": "MemberExpression",
            "computed": True,
            "object": ident("path", 0, 4),
            "property": ident("key", 5, 8),
        }

        assert from_estree(node) == Unsupported("MemberExpression")

    def test_binary_other_operator_unsupported(self) -> None:
        node = {
            "type": "BinaryExpression",
            "operator": "-",
            "left": lit(1, 0, 1),
            "right": lit(2, 4, 5),
            "range": [0, 5],
        }

        result = from_estree(node)

        assert isinstance(result, Unsupported)
        assert result.kind == "BinaryExpression(-)"
        assert result.span == (0, 5)

    def test_parenthesized_expression_unwrapped(self) -> None:
        node = {"type": "ParenthesizedExpression", "expression": lit("a", 1, 4)}

        assert from_estree(node) == Literal("a", (1, 4))

    @pytest.mark.parametrize(
        "node_type", ["ConditionalExpression", "TemplateLiteral", "LogicalExpression"]
    )
    def test_other_types_unsupported(self, node_type) -> None:
        assert from_estree({"type": node_type, "range": [0, 1]}) == Unsupported(node_type, (0, 1))

    def test_call_expression(self) -> None:
        node = {
            "type": "CallExpression",
            "callee": ident("require", 0, 7),
            "arguments": [lit("./a", 8, 13)],
            "range": [0, 14],
        }

        expected = Call(Identifier("require", (0, 7)), (Literal("./a", (8, 13)),), (0, 14))
        assert from_estree(node) == expected

    def test_estree_evaluates(self) -> None:
        node = {
            "type": "BinaryExpression",
            "operator": "+",
            "left": ident("__dirname", 0, 9),
            "right": lit("/x.js", 12, 19),
        }
        env = EvalEnvironment(filename="/r/a.js", dirname="/r")

        assert evaluate(from_estree(node), env).value == "/r/x.js"


class TestFromPythonAst:
    """Test Python ast conversion."""

    def test_kinds(self) -> None:
        node = parse_python_expression('path.join(__dirname, "lib") + ".js"')

        assert isinstance(node, BinaryPlus)
        assert isinstance(node.left, Call)
        assert isinstance(node.left.callee, MemberAccess)
        assert node.left.callee.property == "join"
        assert node.left.arguments[0] == Identifier("__dirname", (10, 19))
        assert node.right == Literal(".js", (30, 35))
        assert node.span == (0, 35)

    def test_evaluates(self) -> None:
        env = EvalEnvironment(filename="/r/a.py", dirname="/r")
        node = parse_python_expression('path.join(__dirname, "lib") + ".py"')

        assert evaluate(node, env).value == "/r/lib.py"

    def test_spans_across_lines_and_unicode(self) -> None:
        source = 'f("é",\n  "x")'
        node = parse_python_expression(source)

        first, second = node.arguments
        assert source[first.span[0] : first.span[1]] == '"é"'
        assert source[second.span[0] : second.span[1]] == '"x"'

    def test_unsupported_python_syntax(self) -> None:
        assert isinstance(parse_python_expression("a if b else c"), Unsupported)
        assert parse_python_expression("a - b").kind == "BinOp(Sub)"
        assert parse_python_expression("f(x=1)").kind == "Call(keywords)"
        assert parse_python_expression("b'x'").kind == "bytes"

    def test_from_parsed_module(self) -> None:
        source = "import os\nx = require(__dirname + '/a')\n"
        call = ast.parse(source).body[1].value

        node = from_python_ast(call, source)

        assert isinstance(node, Call)
        assert node.callee == Identifier("require", (14, 21))

    def test_syntax_error_propagates(self) -> None:
        with pytest.raises(SyntaxError):
            parse_python_expression("f(")
