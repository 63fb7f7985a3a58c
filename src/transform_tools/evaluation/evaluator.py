"""
Static evaluation of call-site argument expressions.

Reduces an argument expression such as

    path.join(__dirname, "lib/" + name + ".js")

to a concrete value using a fixed environment:

- ``__filename``: absolute path of the file being transformed
- ``__dirname``: its directory
- ``path``: namespace whose only member is ``join``

Supported syntax: string/number literals, the identifiers above, ``+``,
``path.join`` member access and calls to it. Everything else fails with a
reason; evaluation never guesses a value and never runs user code.

Example:
    env = EvalEnvironment.for_file("/repo/src/index.js")
    result = evaluate(node, env)
    if result.is_success:
        target = result.value
    else:
        print(f"{result.kind.value}: {result.error}")
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from pathlib import Path

from ..exceptions import (
    ErrorKind,
    EvaluationError,
    JoinArgumentTypeError,
    UnboundIdentifierError,
    UnsupportedExpressionError,
)
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

Value = str | int | float


class _PathNamespace:
    """Value of the join alias identifier (``path``)."""

    def __repr__(self) -> str:
        return "<path namespace>"


class _JoinFunction:
    """Value of ``path.join`` before it is called."""

    def __repr__(self) -> str:
        return "<path.join>"


PATH_NAMESPACE = _PathNamespace()
JOIN_FUNCTION = _JoinFunction()

_Intermediate = Value | _PathNamespace | _JoinFunction


@dataclass(frozen=True)
class EvalEnvironment:
    """Bindings available while evaluating one expression."""

    filename: str
    dirname: str
    filename_name: str = "__filename"
    dirname_name: str = "__dirname"
    join_alias: str = "path"

    @classmethod
    def for_file(cls, file: str | Path, **names: str) -> EvalEnvironment:
        """Environment for a source file, with ``__dirname`` derived from it."""
        path = Path(file).resolve()
        return cls(filename=str(path), dirname=str(path.parent), **names)


class EvalStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class EvalResult:
    """Outcome of evaluating one expression: a value or a failure reason."""

    status: EvalStatus
    value: Value | None = None
    error: str | None = None
    kind: ErrorKind | None = None
    span: Span | None = None
    exception: EvaluationError | None = field(default=None, compare=False, repr=False)

    @property
    def is_success(self) -> bool:
        return self.status == EvalStatus.SUCCESS

    @classmethod
    def success(cls, value: Value) -> EvalResult:
        return cls(status=EvalStatus.SUCCESS, value=value)

    @classmethod
    def failure(cls, error: EvaluationError) -> EvalResult:
        return cls(
            status=EvalStatus.FAILED,
            error=str(error),
            kind=error.kind,
            span=error.span,
            exception=error,
        )

    def unwrap(self) -> Value:
        """Get value or raise the matching EvaluationError."""
        if self.is_success and self.value is not None:
            return self.value
        if self.exception is not None:
            raise self.exception
        raise UnsupportedExpressionError(self.error or "evaluation failed", self.span)


def format_number(value: int | float) -> str:
    """Render a number the way string concatenation in JavaScript does.

    Floats use the shortest round-tripping digits, in positional notation for
    decimal exponents from -6 to 20 and as ``1.5e+21`` / ``1e-7`` otherwise.
    """
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    decimal = Decimal(repr(abs(value))).normalize()
    _, digit_tuple, exponent = decimal.as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple)
    # Position of the decimal point relative to the first digit
    point = exponent + len(digits)

    if len(digits) <= point <= 21:
        text = digits + "0" * (point - len(digits))
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        mantissa = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
        text = f"{mantissa}e{point - 1:+d}"
    return sign + text


def join_paths(*parts: str) -> str:
    """Join path segments textually and normalize the result.

    Unlike ``os.path.join`` an absolute later segment does not discard the
    segments before it, and nothing is resolved against the working directory.
    A trailing separator is kept, and a leading double separator collapses to
    one outside Windows UNC paths.
    """
    joined = os.sep.join(part for part in parts if part)
    if not joined:
        return "."

    normalized = os.path.normpath(joined)
    if normalized.startswith(os.sep * 2) and not os.path.splitdrive(normalized)[0]:
        normalized = normalized[1:]
    separators = tuple(sep for sep in (os.sep, os.altsep) if sep)
    if joined.endswith(separators) and not normalized.endswith(os.sep):
        normalized += os.sep
    return normalized


class ArgumentEvaluator:
    """Visitor reducing ExpressionNode trees to values within an environment."""

    def __init__(self, env: EvalEnvironment) -> None:
        self.env = env

    def evaluate(self, node: ExpressionNode) -> Value:
        """Evaluate ``node`` to a string or number.

        Raises:
            EvaluationError: If the expression cannot be reduced
        """
        try:
            result = self.visit(node)
        except RecursionError as e:
            raise UnsupportedExpressionError("expression is nested too deeply", node.span) from e
        if not _is_value(result):
            raise UnsupportedExpressionError(f"{result!r} is not a value", node.span)
        return result

    def visit(self, node: ExpressionNode) -> _Intermediate:
        method = getattr(self, f"visit_{type(node).__name__}", None)
        if method is None:
            raise UnsupportedExpressionError(
                f"unsupported expression: {type(node).__name__}", getattr(node, "span", None)
            )
        return method(node)

    def visit_Literal(self, node: Literal) -> _Intermediate:  # noqa: N802
        if isinstance(node.value, bool) or not isinstance(node.value, (str, int, float)):
            raise UnsupportedExpressionError(
                f"unsupported literal: {node.value!r}", node.span
            )
        return node.value

    def visit_Identifier(self, node: Identifier) -> _Intermediate:  # noqa: N802
        if node.name == self.env.filename_name:
            return self.env.filename
        if node.name == self.env.dirname_name:
            return self.env.dirname
        if node.name == self.env.join_alias:
            return PATH_NAMESPACE
        raise UnboundIdentifierError(node.name, node.span)

    def visit_BinaryPlus(self, node: BinaryPlus) -> _Intermediate:  # noqa: N802
        left = self.visit(node.left)
        right = self.visit(node.right)
        if not (_is_value(left) and _is_value(right)):
            raise UnsupportedExpressionError("cannot add a non-value operand", node.span)

        if isinstance(left, str) or isinstance(right, str):
            return _to_str(left) + _to_str(right)
        return left + right

    def visit_MemberAccess(self, node: MemberAccess) -> _Intermediate:  # noqa: N802
        target = self.visit(node.object)
        if target is PATH_NAMESPACE and node.property == "join":
            return JOIN_FUNCTION
        raise UnsupportedExpressionError(
            f"unsupported member access: .{node.property}", node.span
        )

    def visit_Call(self, node: Call) -> _Intermediate:  # noqa: N802
        try:
            callee = self.visit(node.callee)
        except EvaluationError as e:
            raise UnsupportedExpressionError(
                "cannot evaluate unknown function call", node.span
            ) from e
        if callee is not JOIN_FUNCTION:
            raise UnsupportedExpressionError("cannot evaluate unknown function call", node.span)

        if not node.arguments:
            raise JoinArgumentTypeError(
                f"{self.env.join_alias}.join requires at least one argument", node.span
            )

        parts: list[str] = []
        for argument in node.arguments:
            value = self.visit(argument)
            if not isinstance(value, str):
                raise JoinArgumentTypeError(
                    f"{self.env.join_alias}.join arguments must be strings, got {value!r}",
                    argument.span,
                )
            parts.append(value)
        return join_paths(*parts)

    def visit_Unsupported(self, node: Unsupported) -> _Intermediate:  # noqa: N802
        raise UnsupportedExpressionError(f"unsupported expression: {node.kind}", node.span)


def _is_value(value: object) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def _to_str(value: Value) -> str:
    return value if isinstance(value, str) else format_number(value)


def evaluate(node: ExpressionNode, env: EvalEnvironment) -> EvalResult:
    """Evaluate an expression node, reporting failure as a result."""
    try:
        return EvalResult.success(ArgumentEvaluator(env).evaluate(node))
    except EvaluationError as e:
        return EvalResult.failure(e)


def evaluate_or_raise(node: ExpressionNode, env: EvalEnvironment) -> Value:
    """Evaluate an expression node, raising EvaluationError on failure."""
    return ArgumentEvaluator(env).evaluate(node)


__all__ = [
    "ArgumentEvaluator",
    "EvalEnvironment",
    "EvalResult",
    "EvalStatus",
    "Value",
    "evaluate",
    "evaluate_or_raise",
    "format_number",
    "join_paths",
]
