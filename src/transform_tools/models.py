"""Configuration data models shared by the resolver and its callers."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# camelCase option names accepted for compatibility with manifest-style options
_OPTION_ALIASES = {
    "configFile": "config_file",
    "configDir": "config_dir",
    "evaluateArguments": "evaluate_arguments",
}


class ConfigData(BaseModel):
    """Resolved configuration handed to a transform.

    Created fresh for every resolution and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    config: Any | None = Field(
        default=None,
        description="Resolved configuration value (None when no configuration exists)",
    )
    config_dir: Path | None = Field(
        default=None,
        description="Directory relative paths inside the configuration resolve against",
    )
    config_file: Path | None = Field(
        default=None,
        description="File the configuration was loaded from, if it came from a separate file",
    )


class TransformOptions(BaseModel):
    """Options recognised by the configuration resolver and require-argument policy."""

    model_config = ConfigDict(frozen=True)

    config_file: Path | None = Field(
        default=None,
        description="File the directly supplied configuration came from",
    )
    config_dir: Path | None = Field(
        default=None,
        description="Explicit configuration directory (takes precedence over config_file)",
    )
    evaluate_arguments: bool = Field(
        default=True,
        description="Evaluate call arguments; when False the raw argument source is used",
    )

    @model_validator(mode="before")
    @classmethod
    def accept_camel_case(cls, data: Any) -> Any:
        """Map configFile/configDir/evaluateArguments onto field names."""
        if isinstance(data, Mapping):
            return {_OPTION_ALIASES.get(key, key): value for key, value in data.items()}
        return data

    @classmethod
    def coerce(cls, options: OptionsLike) -> TransformOptions:
        """Build options from a model, a mapping or None."""
        if options is None:
            return cls()
        if isinstance(options, TransformOptions):
            return options
        return cls.model_validate(dict(options))

    def resolved_config_dir(self) -> Path | None:
        """Configuration directory for directly supplied configuration.

        An explicit ``config_dir`` always wins, otherwise the directory of
        ``config_file`` is used.
        """
        if self.config_dir is not None:
            return self.config_dir.resolve()
        if self.config_file is not None:
            return self.config_file.resolve().parent
        return None


OptionsLike = TransformOptions | Mapping[str, Any] | None

__all__ = ["ConfigData", "OptionsLike", "TransformOptions"]
