"""
Manifest value resolution and external configuration file loading.

A transform's manifest entry is either the configuration itself or a string
naming another file that holds it:

```json
{
  "name": "my-app",
  "envify": {"NODE_ENV": "production"},
  "aliasify": "./config/aliasify.json"
}
```

Supported indirection targets:
- ``.json``: parsed as JSON
- ``.yaml`` / ``.yml``: parsed with ``yaml.safe_load``
- ``.py``: executed as a module, its module-level ``config`` is the value
- anything else: parsed as JSON if possible, otherwise executed as a module

For indirected configuration, ``config_dir`` is the loaded file's directory
so transforms resolve further relative paths next to that file.
"""

from __future__ import annotations

import importlib.machinery
import importlib.util
import json
import logging
import re
from pathlib import Path
from types import CodeType
from typing import Any

import yaml

from .exceptions import (
    ConfigFileParseError,
    ConfigFileReadError,
    ConfigModuleError,
    ConfigShapeError,
)
from .models import ConfigData

logger = logging.getLogger(__name__)

MODULE_CONFIG_ATTRIBUTE = "config"

_YAML_SUFFIXES = {".yaml", ".yml"}


def _check_file(path: Path) -> None:
    if not path.exists():
        raise ConfigFileReadError("Configuration file not found", path)
    if not path.is_file():
        raise ConfigFileReadError("Configuration path is not a file", path)


def _read_text(path: Path) -> str:
    _check_file(path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileReadError(f"Failed to read configuration file: {e}", path) from e


def _parse_json(text: str, path: Path) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigFileParseError(f"Invalid JSON: {e}", path) from e


def _parse_yaml(text: str, path: Path) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigFileParseError(f"Invalid YAML: {e}", path) from e


class _UncachedSourceLoader(importlib.machinery.SourceFileLoader):
    """Source loader that never reads or writes ``__pycache__`` bytecode."""

    def get_code(self, fullname: str) -> CodeType:
        return self.source_to_code(self.get_data(self.path), self.path)


def _execute_module(path: Path) -> Any:
    # Not registered in sys.modules, so every load executes the current source
    module_name = "_transform_config_" + re.sub(r"\W", "_", path.stem)
    spec = importlib.util.spec_from_file_location(
        module_name, str(path), loader=_UncachedSourceLoader(module_name, str(path))
    )
    if spec is None or spec.loader is None:
        raise ConfigModuleError("Cannot create a module loader", path)

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise ConfigModuleError(
            f"Configuration module failed: {type(e).__name__}: {e}", path
        ) from e

    if not hasattr(module, MODULE_CONFIG_ATTRIBUTE):
        raise ConfigModuleError(
            f"Configuration module does not define '{MODULE_CONFIG_ATTRIBUTE}'", path
        )
    return getattr(module, MODULE_CONFIG_ATTRIBUTE)


def load_config_file(path: str | Path) -> Any:
    """
    Load configuration data from a JSON, YAML or Python file.

    Args:
        path: Absolute path of the configuration file

    Returns:
        The parsed or exported configuration value

    Raises:
        ConfigFileReadError: File missing or unreadable
        ConfigFileParseError: Invalid JSON/YAML
        ConfigModuleError: Python module raised or has no ``config``
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".py":
        _check_file(path)
        return _execute_module(path)

    text = _read_text(path)
    if suffix == ".json":
        return _parse_json(text, path)
    if suffix in _YAML_SUFFIXES:
        return _parse_yaml(text, path)

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.debug(f"{path} is not JSON, executing it as a Python module")
        return _execute_module(path)


def resolve_config_value(manifest_dir: str | Path, raw_value: Any) -> ConfigData:
    """
    Turn a manifest value into ConfigData, following string indirection.

    Args:
        manifest_dir: Directory containing the manifest
        raw_value: Value read from the manifest (object, list, string or None)

    Returns:
        ConfigData for the inline value or the loaded file

    Raises:
        ConfigShapeError: If the value is neither an object nor a string path
        ConfigFileReadError, ConfigFileParseError, ConfigModuleError:
            If an indirected file cannot be loaded
    """
    manifest_dir = Path(manifest_dir)

    if raw_value is None:
        return ConfigData(config=None, config_dir=manifest_dir)

    if isinstance(raw_value, (dict, list)):
        return ConfigData(config=raw_value, config_dir=manifest_dir)

    if isinstance(raw_value, str):
        config_file = (manifest_dir / raw_value).resolve()
        config = load_config_file(config_file)
        logger.info(f"Loaded transform configuration from: {config_file}")
        return ConfigData(config=config, config_dir=config_file.parent, config_file=config_file)

    raise ConfigShapeError(raw_value, manifest_dir)


__all__ = ["MODULE_CONFIG_ATTRIBUTE", "load_config_file", "resolve_config_value"]
