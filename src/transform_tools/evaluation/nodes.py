"""Expression nodes understood by the argument evaluator.

A closed set of immutable node kinds. Parser output (ESTree dicts, Python
``ast``) is converted into these by ``transform_tools.evaluation.adapters``;
anything the evaluator has no rule for becomes ``Unsupported``.

Every node carries an optional ``span``: (start, end) offsets into the
source text, end exclusive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

Span = tuple[int, int]


@dataclass(frozen=True)
class Literal:
    value: str | int | float | bool | None
    span: Span | None = None


@dataclass(frozen=True)
class Identifier:
    name: str
    span: Span | None = None


@dataclass(frozen=True)
class MemberAccess:
    """``object.property`` (or ``object["property"]``)."""

    object: ExpressionNode
    property: str
    span: Span | None = None


@dataclass(frozen=True)
class BinaryPlus:
    left: ExpressionNode
    right: ExpressionNode
    span: Span | None = None


@dataclass(frozen=True)
class Call:
    callee: ExpressionNode
    arguments: tuple[ExpressionNode, ...] = ()
    span: Span | None = None


@dataclass(frozen=True)
class Unsupported:
    """Any syntax the evaluator cannot reduce (conditionals, templates, ...).

    Attributes:
        kind: Parser node type name, used in error messages
    """

    kind: str
    span: Span | None = None


ExpressionNode = Union[  # noqa: UP007
    Literal, Identifier, MemberAccess, BinaryPlus, Call, Unsupported
]


__all__ = [
    "BinaryPlus",
    "Call",
    "ExpressionNode",
    "Identifier",
    "Literal",
    "MemberAccess",
    "Span",
    "Unsupported",
]
