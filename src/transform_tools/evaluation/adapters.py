"""
Conversion of parser output into ExpressionNode trees.

Two parser shapes are supported:

- ESTree dictionaries, as produced by esprima, acorn or babel's ``estree``
  plugin and usually exchanged as JSON. Spans come from ``range`` or
  ``start``/``end``, which count UTF-16 code units; pass the source text to
  convert them to ``str`` indices.
- Python ``ast`` expressions. Spans are computed from line/column positions,
  so the original source text is required.

Syntax with no evaluation rule is converted to ``Unsupported`` rather than
rejected here; the evaluator reports it with its span.
"""

from __future__ import annotations

import ast
from collections.abc import Mapping
from typing import Any

from .nodes import (
    BinaryPlus,
    Call,
    ExpressionNode,
    Identifier,
    Literal,
    MemberAccess,
    Span,
    Unsupported,
)

# ===========================================================================
# ESTree
# ===========================================================================


def _utf16_index(source: str | None) -> list[int] | None:
    """Map UTF-16 code unit offsets to ``str`` indices.

    JavaScript parsers count positions in UTF-16 code units, so every
    character outside the BMP shifts later offsets by one. Returns None when
    both counts agree.
    """
    if source is None or all(ord(char) <= 0xFFFF for char in source):
        return None
    index: list[int] = []
    for position, char in enumerate(source):
        index.append(position)
        if ord(char) > 0xFFFF:
            index.append(position)
    index.append(len(source))
    return index


def _estree_span(node: Mapping[str, Any], index: list[int] | None) -> Span | None:
    node_range = node.get("range")
    if node_range is not None and len(node_range) == 2:
        start, end = int(node_range[0]), int(node_range[1])
    elif "start" in node and "end" in node:
        start, end = int(node["start"]), int(node["end"])
    else:
        return None
    if index is not None:
        last = len(index) - 1
        start, end = index[min(start, last)], index[min(end, last)]
    return (start, end)


def from_estree(node: Mapping[str, Any], source: str | None = None) -> ExpressionNode:
    """Convert an ESTree expression dict to an ExpressionNode.

    Args:
        node: ESTree expression
        source: Text the node was parsed from. When given, UTF-16 offsets are
            converted so spans index into ``source`` directly.
    """
    return _convert_estree(node, _utf16_index(source))


def _convert_estree(node: Mapping[str, Any], index: list[int] | None) -> ExpressionNode:
    node_type = node.get("type", "<unknown>")
    span = _estree_span(node, index)

    if node_type == "Literal":
        if "regex" in node or "bigint" in node:
            return Unsupported(kind="Literal", span=span)
        return Literal(value=node.get("value"), span=span)

    if node_type == "Identifier":
        return Identifier(name=node["name"], span=span)

    if node_type == "ParenthesizedExpression":
        return _convert_estree(node["expression"], index)

    if node_type == "MemberExpression":
        prop = node["property"]
        if not node.get("computed") and prop.get("type") == "Identifier":
            name = prop["name"]
        elif node.get("computed") and prop.get("type") == "Literal" and isinstance(
            prop.get("value"), str
        ):
            name = prop["value"]
        else:
            return Unsupported(kind=node_type, span=span)
        return MemberAccess(
            object=_convert_estree(node["object"], index), property=name, span=span
        )

    if node_type == "BinaryExpression":
        if node.get("operator") != "+":
            return Unsupported(kind=f"BinaryExpression({node.get('operator')})", span=span)
        return BinaryPlus(
            left=_convert_estree(node["left"], index),
            right=_convert_estree(node["right"], index),
            span=span,
        )

    if node_type == "CallExpression":
        if node.get("optional"):
            return Unsupported(kind="OptionalCallExpression", span=span)
        return Call(
            callee=_convert_estree(node["callee"], index),
            arguments=tuple(_convert_estree(arg, index) for arg in node.get("arguments", ())),
            span=span,
        )

    return Unsupported(kind=node_type, span=span)


# ===========================================================================
# Python ast
# ===========================================================================


class PythonAstAdapter:
    """Converts Python ``ast`` expressions, mapping positions to source offsets."""

    def __init__(self, source: str) -> None:
        self.source = source
        self._lines = source.splitlines(keepends=True)
        self._line_starts: list[int] = []
        offset = 0
        for line in self._lines:
            self._line_starts.append(offset)
            offset += len(line)

    def _offset(self, lineno: int, col_offset: int) -> int:
        # col_offset counts UTF-8 bytes, not characters
        if lineno - 1 >= len(self._lines):
            return len(self.source)
        line = self._lines[lineno - 1]
        chars = len(line.encode("utf-8")[:col_offset].decode("utf-8", errors="ignore"))
        return self._line_starts[lineno - 1] + chars

    def span(self, node: ast.AST) -> Span | None:
        end_lineno = getattr(node, "end_lineno", None)
        end_col = getattr(node, "end_col_offset", None)
        if end_lineno is None or end_col is None:
            return None
        return (
            self._offset(node.lineno, node.col_offset),  # type: ignore[attr-defined]
            self._offset(end_lineno, end_col),
        )

    def convert(self, node: ast.AST) -> ExpressionNode:
        span = self.span(node)

        if isinstance(node, ast.Expression):
            return self.convert(node.body)

        if isinstance(node, ast.Constant):
            if isinstance(node.value, (bytes, complex)) or node.value is Ellipsis:
                return Unsupported(kind=type(node.value).__name__, span=span)
            return Literal(value=node.value, span=span)

        if isinstance(node, ast.Name):
            return Identifier(name=node.id, span=span)

        if isinstance(node, ast.Attribute):
            return MemberAccess(object=self.convert(node.value), property=node.attr, span=span)

        if isinstance(node, ast.BinOp):
            if not isinstance(node.op, ast.Add):
                return Unsupported(kind=f"BinOp({type(node.op).__name__})", span=span)
            return BinaryPlus(
                left=self.convert(node.left), right=self.convert(node.right), span=span
            )

        if isinstance(node, ast.Call):
            if node.keywords:
                return Unsupported(kind="Call(keywords)", span=span)
            return Call(
                callee=self.convert(node.func),
                arguments=tuple(self.convert(arg) for arg in node.args),
                span=span,
            )

        return Unsupported(kind=type(node).__name__, span=span)


def from_python_ast(node: ast.AST, source: str) -> ExpressionNode:
    """Convert a Python ``ast`` expression parsed from ``source``."""
    return PythonAstAdapter(source).convert(node)


def parse_python_expression(source: str) -> ExpressionNode:
    """Parse a single Python expression and convert it.

    Raises:
        SyntaxError: If ``source`` is not a valid expression
    """
    return from_python_ast(ast.parse(source, mode="eval"), source)


__all__ = ["PythonAstAdapter", "from_estree", "from_python_ast", "parse_python_expression"]
