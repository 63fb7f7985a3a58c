"""Tests for require-style argument evaluation policy."""

import os

import pytest

from transform_tools.config import TransformConfigLoader
from transform_tools.evaluation import Call, EvalEnvironment, Identifier, Literal
from transform_tools.exceptions import (
    EvaluationError,
    UnboundIdentifierError,
    UnsupportedExpressionError,
)
from transform_tools.models import TransformOptions
from transform_tools.require_args import (
    argument_source,
    evaluate_require_argument,
    evaluate_require_arguments,
)

# require(path.join(__dirname, "lib") + ".js", "x")
SOURCE = 'require(path.join(__dirname, "lib") + ".js", "x")'
REQUIRE_CALL = {
    "type": "CallExpression",
    "range": [0, 49],
    "callee": {"type": "Identifier", "name": "require", "range": [0, 7]},
    "arguments": [
        {
            "type": "BinaryExpression",
            "operator": "+",
            "range": [8, 43],
            "left": {
                "type": "CallExpression",
                "range": [8, 35],
                "callee": {
                    "type": "MemberExpression",
                    "computed": False,
                    "range": [8, 17],
                    "object": {"type": "Identifier", "name": "path", "range": [8, 12]},
                    "property": {"type": "Identifier", "name": "join", "range": [13, 17]},
                },
                "arguments": [
                    {"type": "Identifier", "name": "__dirname", "range": [18, 27]},
                    {"type": "Literal", "value": "lib", "range": [29, 34]},
                ],
            },
            "right": {"type": "Literal", "value": ".js", "range": [38, 43]},
        },
        {"type": "Literal", "value": "x", "range": [45, 48]},
    ],
}

FILE = os.path.join(os.sep, "repo", "src", "index.js")
ENV = EvalEnvironment(filename=FILE, dirname=os.path.dirname(FILE))


class TestEvaluateRequireArguments:
    """Test evaluated mode."""

    def test_evaluates_all_arguments(self) -> None:
        values = evaluate_require_arguments(REQUIRE_CALL, FILE, SOURCE, env=ENV)

        assert values == [os.path.join(os.path.dirname(FILE), "lib") + ".js", "x"]

    def test_environment_derived_from_file(self, project) -> None:
        file = project / "src" / "main.js"
        call = Call(Identifier("require"), (Identifier("__filename"),))

        assert evaluate_require_arguments(call, file) == [str(file)]

    def test_first_argument(self) -> None:
        value = evaluate_require_argument(REQUIRE_CALL, FILE, env=ENV)

        assert value == os.path.join(os.path.dirname(FILE), "lib") + ".js"

    def test_failure_raises(self) -> None:
        call = Call(Identifier("require"), (Identifier("name", span=(8, 12)),))

        with pytest.raises(UnboundIdentifierError) as exc_info:
            evaluate_require_arguments(call, FILE, env=ENV)

        assert exc_info.value.span == (8, 12)

    def test_unknown_call_argument_raises(self) -> None:
        call = Call(Identifier("require"), (Call(Identifier("foo"), (Literal(1), Literal(2))),))

        with pytest.raises(UnsupportedExpressionError, match="unknown function call"):
            evaluate_require_argument(call, FILE, env=ENV)

    def test_no_arguments(self) -> None:
        call = Call(Identifier("require"), ())

        assert evaluate_require_arguments(call, FILE, env=ENV) == []
        with pytest.raises(ValueError, match="no arguments"):
            evaluate_require_argument(call, FILE, env=ENV)

    def test_non_call_rejected(self) -> None:
        with pytest.raises(TypeError, match="Expected a call expression"):
            evaluate_require_arguments(Identifier("require"), FILE)


class TestRawArguments:
    """Test evaluate_arguments=False."""

    def test_returns_exact_argument_source(self) -> None:
        raw = evaluate_require_arguments(REQUIRE_CALL, FILE, SOURCE, evaluate_arguments=False)

        assert raw == 'path.join(__dirname, "lib") + ".js", "x"'

    def test_first_argument_mode_also_returns_full_list(self) -> None:
        raw = evaluate_require_argument(REQUIRE_CALL, FILE, SOURCE, evaluate_arguments=False)

        assert raw == 'path.join(__dirname, "lib") + ".js", "x"'

    def test_bypasses_failing_evaluation(self) -> None:
        source = "require(cond ? a : b)"
        call = {
            "type": "CallExpression",
            "callee": {"type": "Identifier", "name": "require", "range": [0, 7]},
            "arguments": [{"type": "ConditionalExpression", "range": [8, 20]}],
        }

        with pytest.raises(EvaluationError):
            evaluate_require_arguments(call, FILE, source)

        assert evaluate_require_arguments(call, FILE, source, evaluate_arguments=False) == (
            "cond ? a : b"
        )

    def test_no_arguments_is_empty_text(self) -> None:
        assert argument_source(Call(Identifier("require"), ()), "require()") == ""

    def test_source_required(self) -> None:
        with pytest.raises(ValueError, match="source is required"):
            evaluate_require_arguments(REQUIRE_CALL, FILE, evaluate_arguments=False)

    def test_spans_required(self) -> None:
        call = Call(Identifier("require"), (Literal("a"),))

        with pytest.raises(ValueError, match="no source spans"):
            argument_source(call, "require('a')")


class TestEvaluateArgumentsOption:
    """Test the evaluateArguments transform option."""

    def test_configured_option_returns_raw_source(self) -> None:
        loader = TransformConfigLoader("requireify").configure({}, {"evaluateArguments": False})

        raw = evaluate_require_arguments(REQUIRE_CALL, FILE, SOURCE, options=loader.options)

        assert raw == 'path.join(__dirname, "lib") + ".js", "x"'

    def test_option_mapping_accepted(self) -> None:
        raw = evaluate_require_argument(
            REQUIRE_CALL, FILE, SOURCE, options={"evaluateArguments": False}
        )

        assert raw == 'path.join(__dirname, "lib") + ".js", "x"'

    def test_default_options_evaluate(self) -> None:
        loader = TransformConfigLoader("requireify")

        values = evaluate_require_arguments(REQUIRE_CALL, FILE, options=loader.options, env=ENV)

        assert values[1] == "x"

    def test_keyword_overrides_options(self) -> None:
        options = TransformOptions(evaluate_arguments=False)

        values = evaluate_require_arguments(
            REQUIRE_CALL, FILE, SOURCE, options=options, evaluate_arguments=True, env=ENV
        )

        assert values == [os.path.join(os.path.dirname(FILE), "lib") + ".js", "x"]


class TestUtf16Offsets:
    """ESTree offsets count UTF-16 code units; source is indexed by character."""

    def test_raw_source_after_astral_character(self) -> None:
        source = 'x("\U0001F600", "a")'
        call = {
            "type": "CallExpression",
            "range": [0, 12],
            "callee": {"type": "Identifier", "name": "x", "range": [0, 1]},
            "arguments": [
                {"type": "Literal", "value": "\U0001F600", "range": [2, 6]},
                {"type": "Literal", "value": "a", "range": [8, 11]},
            ],
        }

        raw = evaluate_require_arguments(call, FILE, source, evaluate_arguments=False)

        assert raw == '"\U0001F600", "a"'

    def test_error_span_indexes_source(self) -> None:
        source = 'require("\U0001F600" + name)'
        call = {
            "type": "CallExpression",
            "range": [0, 20],
            "callee": {"type": "Identifier", "name": "require", "range": [0, 7]},
            "arguments": [
                {
                    "type": "BinaryExpression",
                    "operator": "+",
                    "range": [8, 19],
                    "left": {"type": "Literal", "value": "\U0001F600", "range": [8, 12]},
                    "right": {"type": "Identifier", "name": "name", "range": [15, 19]},
                }
            ],
        }

        with pytest.raises(UnboundIdentifierError) as exc_info:
            evaluate_require_arguments(call, FILE, source, env=ENV)

        start, end = exc_info.value.span
        assert source[start:end] == "name"
