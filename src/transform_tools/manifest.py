"""Project manifest lookup.

Walks up from a source file's directory to the nearest project manifest
(``package.json`` by default) and parses it. The nearest ancestor wins.

Manifest name priority:
1. Names passed explicitly to ``locate_manifest``
2. TRANSFORM_TOOLS_MANIFEST environment variable (comma separated)
3. Built-in default: ``package.json``

``pyproject.toml`` is also understood as a manifest; its ``[tool]`` table is
used as the key space, so a transform named ``envify`` reads
``[tool.envify]``.

Manifests are re-read on every call. A manifest edited between two builds
is always picked up.
"""

from __future__ import annotations

import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ConfigFileParseError, ConfigFileReadError, ErrorKind
from .load_result import LoadResult

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAMES: tuple[str, ...] = ("package.json",)
MANIFEST_ENV_VAR = "TRANSFORM_TOOLS_MANIFEST"


class ManifestRecord(BaseModel):
    """A parsed project manifest and where it was found."""

    model_config = ConfigDict(frozen=True)

    data: dict[str, Any] = Field(description="Manifest keys (the [tool] table for pyproject.toml)")
    path: Path = Field(description="Absolute path of the manifest file")

    @property
    def directory(self) -> Path:
        """Directory containing the manifest."""
        return self.path.parent


def get_manifest_names(
    manifest_names: tuple[str, ...] | list[str] | None = None,
) -> tuple[str, ...]:
    """Determine manifest file names using priority order.

    Args:
        manifest_names: Explicit names (optional)

    Returns:
        Tuple of file names checked in each directory, in order
    """
    if manifest_names:
        return tuple(manifest_names)

    env_names = os.getenv(MANIFEST_ENV_VAR)
    if env_names is not None:
        names = tuple(name.strip() for name in env_names.split(",") if name.strip())
        if names:
            return names
        logger.warning(f"{MANIFEST_ENV_VAR} is set but empty, using {DEFAULT_MANIFEST_NAMES}")

    return DEFAULT_MANIFEST_NAMES


def read_manifest(path: Path) -> ManifestRecord:
    """Parse a manifest file.

    Raises:
        ConfigFileReadError: If the file cannot be read
        ConfigFileParseError: If the content is invalid or not an object
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileReadError(f"Failed to read manifest: {e}", path) from e

    if path.name == "pyproject.toml":
        try:
            document = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ConfigFileParseError(f"Invalid TOML in manifest: {e}", path) from e
        data = document.get("tool", {})
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigFileParseError(f"Invalid JSON in manifest: {e}", path) from e

    if not isinstance(data, dict):
        raise ConfigFileParseError(
            f"Manifest must contain an object, got {type(data).__name__}", path
        )

    return ManifestRecord(data=data, path=path)


def locate_manifest(
    start_file: str | Path,
    manifest_names: tuple[str, ...] | list[str] | None = None,
) -> LoadResult[ManifestRecord]:
    """
    Find and parse the manifest nearest to ``start_file``.

    Starts at the directory containing ``start_file`` and moves to the parent
    until a manifest is found or the filesystem root has been checked.

    Args:
        start_file: Source file whose ancestry is searched
        manifest_names: Manifest file names to look for (optional)

    Returns:
        LoadResult.success(ManifestRecord) for the nearest manifest
        LoadResult.failure(...) with kind MANIFEST_NOT_FOUND if there is none

    Raises:
        ConfigFileReadError: If a manifest exists but cannot be read
        ConfigFileParseError: If a manifest exists but is malformed
    """
    names = get_manifest_names(manifest_names)
    directory = Path(start_file).resolve().parent
    searched: list[Path] = []

    while True:
        searched.append(directory)
        for name in names:
            candidate = directory / name
            if candidate.is_file():
                logger.debug(f"Found manifest: {candidate}")
                return LoadResult.success(read_manifest(candidate), tuple(searched))

        if directory.parent == directory:
            break
        directory = directory.parent

    logger.debug(f"No {' or '.join(names)} in {len(searched)} directories above {start_file}")
    return LoadResult.failure(
        f"No manifest ({', '.join(names)}) found for {start_file}",
        ErrorKind.MANIFEST_NOT_FOUND,
        tuple(searched),
    )


__all__ = [
    "DEFAULT_MANIFEST_NAMES",
    "MANIFEST_ENV_VAR",
    "ManifestRecord",
    "get_manifest_names",
    "locate_manifest",
    "read_manifest",
]
