"""
Static evaluation of call-site argument expressions.

Public API:
    - evaluate / evaluate_or_raise: Reduce an ExpressionNode to a value
    - EvalEnvironment: __filename / __dirname / path bindings
    - EvalResult: Value or failure reason with kind and span
    - from_estree / from_python_ast / parse_python_expression: Parser adapters
    - Literal, Identifier, MemberAccess, BinaryPlus, Call, Unsupported: Node kinds
"""

from .adapters import PythonAstAdapter, from_estree, from_python_ast, parse_python_expression
from .evaluator import (
    ArgumentEvaluator,
    EvalEnvironment,
    EvalResult,
    EvalStatus,
    evaluate,
    evaluate_or_raise,
    join_paths,
)
from .nodes import BinaryPlus, Call, ExpressionNode, Identifier, Literal, MemberAccess, Unsupported

__all__ = [
    "ArgumentEvaluator",
    "BinaryPlus",
    "Call",
    "EvalEnvironment",
    "EvalResult",
    "EvalStatus",
    "ExpressionNode",
    "Identifier",
    "Literal",
    "MemberAccess",
    "PythonAstAdapter",
    "Unsupported",
    "evaluate",
    "evaluate_or_raise",
    "from_estree",
    "from_python_ast",
    "join_paths",
    "parse_python_expression",
]
