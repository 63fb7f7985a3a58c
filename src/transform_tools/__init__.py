"""Configuration and argument-evaluation helpers for source transforms.

This package contains the two pieces most source-to-source build transforms
reimplement:

- TransformConfigLoader: Resolves a transform's configuration from the
  nearest manifest (``package.json`` by default), following string
  indirection to JSON/YAML/Python files, or from directly supplied config
- evaluate / evaluate_require_arguments: Statically reduce call arguments
  such as ``path.join(__dirname, "x")`` to concrete values

Supporting types:

- ConfigData / TransformOptions: Pydantic v2 models for resolved config/options
- LoadResult: Error monad returned by the manifest locator
- TransformToolsError: Root of the exception hierarchy (see ``exceptions``)
"""

from .config import TransformConfigLoader, load_transform_config, load_transform_config_async
from .config_files import load_config_file, resolve_config_value
from .evaluation import (
    EvalEnvironment,
    EvalResult,
    evaluate,
    evaluate_or_raise,
    from_estree,
    from_python_ast,
    parse_python_expression,
)
from .exceptions import (
    ConfigError,
    ConfigFileParseError,
    ConfigFileReadError,
    ConfigModuleError,
    ConfigShapeError,
    ErrorKind,
    EvaluationError,
    JoinArgumentTypeError,
    TransformToolsError,
    UnboundIdentifierError,
    UnsupportedExpressionError,
)
from .load_result import LoadResult, LoadStatus
from .manifest import ManifestRecord, locate_manifest
from .models import ConfigData, TransformOptions
from .require_args import argument_source, evaluate_require_argument, evaluate_require_arguments

__all__ = [
    # Configuration
    "TransformConfigLoader",
    "load_transform_config",
    "load_transform_config_async",
    "load_config_file",
    "resolve_config_value",
    "locate_manifest",
    "ManifestRecord",
    "ConfigData",
    "TransformOptions",
    "LoadResult",
    "LoadStatus",
    # Evaluation
    "EvalEnvironment",
    "EvalResult",
    "evaluate",
    "evaluate_or_raise",
    "from_estree",
    "from_python_ast",
    "parse_python_expression",
    "argument_source",
    "evaluate_require_argument",
    "evaluate_require_arguments",
    # Errors
    "ErrorKind",
    "TransformToolsError",
    "ConfigError",
    "ConfigFileReadError",
    "ConfigFileParseError",
    "ConfigModuleError",
    "ConfigShapeError",
    "EvaluationError",
    "UnsupportedExpressionError",
    "UnboundIdentifierError",
    "JoinArgumentTypeError",
]
