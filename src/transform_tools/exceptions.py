"""Exceptions for configuration loading and argument evaluation.

Exception Hierarchy:
    TransformToolsError (base)
    ├── ConfigError (configuration could not be loaded)
    │   ├── ConfigFileReadError (missing or unreadable file)
    │   ├── ConfigFileParseError (invalid JSON/YAML/TOML)
    │   ├── ConfigModuleError (Python config module failed to execute)
    │   └── ConfigShapeError (value is neither an object nor a string path)
    └── EvaluationError (expression could not be reduced to a value)
        ├── UnsupportedExpressionError (node kind or call not supported)
        ├── UnboundIdentifierError (identifier without a binding)
        └── JoinArgumentTypeError (bad argument count/type for path.join)

A missing manifest is not an exception: the locator returns a failed
``LoadResult`` tagged with ``ErrorKind.MANIFEST_NOT_FOUND`` and the
configuration loader treats it as "no configuration".

Example:
    >>> try:
    ...     data = loader.load_config("src/index.js")
    ... except ConfigError as e:
    ...     print(f"{e.kind.value}: {e.path}")
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    """Machine-readable error kinds."""

    MANIFEST_NOT_FOUND = "manifest_not_found"
    CONFIG_FILE_READ = "config_file_read"
    CONFIG_FILE_PARSE = "config_file_parse"
    CONFIG_MODULE = "config_module"
    CONFIG_SHAPE = "config_shape"
    UNSUPPORTED_EXPRESSION = "unsupported_expression"
    UNBOUND_IDENTIFIER = "unbound_identifier"
    JOIN_ARGUMENT_TYPE = "join_argument_type"


class TransformToolsError(Exception):
    """Base exception for all transform-tools errors."""

    kind: ErrorKind


class ConfigError(TransformToolsError):
    """Configuration could not be loaded.

    Attributes:
        path: File the error relates to (None when not file-specific)
        details: Human-readable description of the failure
    """

    kind = ErrorKind.CONFIG_FILE_READ

    def __init__(self, details: str, path: str | Path | None = None) -> None:
        self.details = details
        self.path = Path(path) if path is not None else None

        message = details
        if self.path is not None:
            message = f"{details} ({self.path})"
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, path={self.path!r})"


class ConfigFileReadError(ConfigError):
    """Configuration file is missing or cannot be read."""

    kind = ErrorKind.CONFIG_FILE_READ


class ConfigFileParseError(ConfigError):
    """Configuration file content is not valid JSON, YAML or TOML."""

    kind = ErrorKind.CONFIG_FILE_PARSE


class ConfigModuleError(ConfigError):
    """Python configuration module raised while executing, or exports no ``config``."""

    kind = ErrorKind.CONFIG_MODULE


class ConfigShapeError(ConfigError):
    """Manifest value is neither an inline object nor a string path."""

    kind = ErrorKind.CONFIG_SHAPE

    def __init__(self, value: object, path: str | Path | None = None) -> None:
        self.value = value
        super().__init__(
            "configuration value must be an object or a string path, "
            f"got {type(value).__name__}",
            path,
        )


class EvaluationError(TransformToolsError):
    """An argument expression could not be reduced to a concrete value.

    Attributes:
        span: (start, end) source offsets of the offending node, if known
    """

    kind = ErrorKind.UNSUPPORTED_EXPRESSION

    def __init__(self, message: str, span: tuple[int, int] | None = None) -> None:
        self.span = span
        super().__init__(message)


class UnsupportedExpressionError(EvaluationError):
    kind = ErrorKind.UNSUPPORTED_EXPRESSION


class UnboundIdentifierError(EvaluationError):
    kind = ErrorKind.UNBOUND_IDENTIFIER

    def __init__(self, name: str, span: tuple[int, int] | None = None) -> None:
        self.name = name
        super().__init__(f"'{name}' is not defined", span)


class JoinArgumentTypeError(EvaluationError):
    kind = ErrorKind.JOIN_ARGUMENT_TYPE
