"""
Argument handling for require-style call rewriting.

A require transform visits every ``require(...)`` call and needs either the
evaluated arguments (``require(__dirname + "/lib")`` → ``["/repo/src/lib"]``)
or, when evaluation is switched off with the ``evaluateArguments`` option, the
exact source text between the parentheses.

The switch is normally taken from the transform's options:

```python
loader = TransformConfigLoader("requireify").configure({}, {"evaluateArguments": False})
raw = evaluate_require_arguments(call, file, source, options=loader.options)
```

Evaluation failures are raised as ``EvaluationError`` so the transform can
report a build error or fall back to the raw text, per its own policy.

ESTree call dicts carry UTF-16 offsets. When ``source`` is given they are
converted to ``str`` indices, so spans on raised errors and the raw argument
text line up with ``source``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .evaluation.adapters import from_estree
from .evaluation.evaluator import ArgumentEvaluator, EvalEnvironment, Value
from .evaluation.nodes import Call, ExpressionNode
from .models import OptionsLike, TransformOptions

logger = logging.getLogger(__name__)


def _as_call(call: Call | Mapping[str, Any], source: str | None = None) -> Call:
    node: ExpressionNode = from_estree(call, source) if isinstance(call, Mapping) else call
    if not isinstance(node, Call):
        raise TypeError(f"Expected a call expression, got {type(node).__name__}")
    return node


def _should_evaluate(evaluate_arguments: bool | None, options: OptionsLike) -> bool:
    # An explicit keyword overrides the transform's options
    if evaluate_arguments is not None:
        return evaluate_arguments
    return TransformOptions.coerce(options).evaluate_arguments


def argument_source(call: Call | Mapping[str, Any], source: str) -> str:
    """Source text spanning a call's argument list (without parentheses).

    Raises:
        ValueError: If the argument nodes carry no source spans
    """
    node = _as_call(call, source)
    if not node.arguments:
        return ""

    first, last = node.arguments[0].span, node.arguments[-1].span
    if first is None or last is None:
        raise ValueError("Argument nodes have no source spans; raw source is unavailable")
    return source[first[0] : last[1]]


def evaluate_require_arguments(
    call: Call | Mapping[str, Any],
    file: str | Path,
    source: str | None = None,
    *,
    options: OptionsLike = None,
    evaluate_arguments: bool | None = None,
    env: EvalEnvironment | None = None,
) -> list[Value] | str:
    """
    Evaluate the arguments of a require-style call.

    Args:
        call: Call node (ExpressionNode or ESTree dict)
        file: File containing the call (provides __filename/__dirname)
        source: Source text of ``file``; required when evaluation is off
        options: Transform options; ``evaluate_arguments`` selects the mode
        evaluate_arguments: Overrides ``options`` when given
        env: Custom evaluation environment (optional)

    Returns:
        List of evaluated argument values, or the raw argument source text

    Raises:
        EvaluationError: If an argument cannot be evaluated
    """
    node = _as_call(call, source)

    if not _should_evaluate(evaluate_arguments, options):
        if source is None:
            raise ValueError("source is required when evaluate_arguments is False")
        return argument_source(node, source)

    evaluator = ArgumentEvaluator(env or EvalEnvironment.for_file(file))
    values = [evaluator.evaluate(argument) for argument in node.arguments]
    logger.debug(f"Evaluated require arguments in {file}: {values}")
    return values


def evaluate_require_argument(
    call: Call | Mapping[str, Any],
    file: str | Path,
    source: str | None = None,
    *,
    options: OptionsLike = None,
    evaluate_arguments: bool | None = None,
    env: EvalEnvironment | None = None,
) -> Value | str:
    """First argument of a require-style call, evaluated or as raw source.

    Raises:
        EvaluationError: If the first argument cannot be evaluated
        ValueError: If the call has no arguments
    """
    node = _as_call(call, source)

    if not _should_evaluate(evaluate_arguments, options):
        if source is None:
            raise ValueError("source is required when evaluate_arguments is False")
        return argument_source(node, source)

    if not node.arguments:
        raise ValueError("Call has no arguments")

    evaluator = ArgumentEvaluator(env or EvalEnvironment.for_file(file))
    return evaluator.evaluate(node.arguments[0])


__all__ = ["argument_source", "evaluate_require_argument", "evaluate_require_arguments"]
