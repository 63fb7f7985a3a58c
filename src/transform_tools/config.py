"""Transform configuration loading.

Resolves a named transform's configuration for a given source file:

1. Configuration supplied directly with ``configure``/``set_config`` wins and
   never touches the filesystem.
2. Otherwise the nearest manifest above the file is located. No manifest
   means no configuration (not an error).
3. The manifest value stored under the transform's name is resolved, following
   string indirection to an external JSON/YAML/Python file.

Example:
    ```python
    loader = TransformConfigLoader("aliasify")
    data = loader.load_config("src/index.js")
    if data.config is not None:
        aliases = data.config["aliases"]

    # Bypass manifests entirely (e.g. in tests)
    configured = loader.configure({"aliases": {}}, {"configDir": "/repo"})
    ```

Thread Safety:
    Loading keeps no shared mutable state; concurrent loads are independent.
    ``set_config`` assumes a single writer.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from .config_files import resolve_config_value
from .manifest import locate_manifest
from .models import ConfigData, OptionsLike, TransformOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TransformConfigLoader:
    """Configuration resolver for one named transform.

    A loader is an immutable base (transform name, manifest names, options)
    plus an optional override cell holding directly supplied configuration.

    Usage:
        ```python
        loader = TransformConfigLoader("envify")
        data = loader.load_config(path)
        data = await loader.load_config_async(path)
        ```
    """

    def __init__(
        self,
        transform_name: str,
        manifest_names: tuple[str, ...] | list[str] | None = None,
        options: OptionsLike = None,
    ):
        """Initialize a loader.

        Args:
            transform_name: Manifest key holding this transform's configuration
            manifest_names: Manifest file names to search for (optional).
                If not provided, uses environment variable or ``package.json``.
            options: Transform options (optional)
        """
        if not transform_name or not transform_name.strip():
            raise ValueError("Transform name cannot be empty")

        self.transform_name = transform_name
        self.manifest_names = tuple(manifest_names) if manifest_names else None
        self._options = TransformOptions.coerce(options)
        self._override: ConfigData | None = None

    @property
    def options(self) -> TransformOptions:
        return self._options

    @property
    def has_override(self) -> bool:
        """True when configuration was supplied directly."""
        return self._override is not None

    def configure(self, config: Any, options: OptionsLike = None) -> TransformConfigLoader:
        """Return a new loader that always yields ``config``.

        The returned loader shares no mutable state with this one, which keeps
        its manifest-based behaviour.

        Args:
            config: Configuration value to use for every file
            options: ``config_file`` / ``config_dir`` describing where it came from

        Returns:
            Independent TransformConfigLoader with the override set
        """
        configured = TransformConfigLoader(
            self.transform_name,
            manifest_names=self.manifest_names,
            options=self._merge_options(options),
        )
        configured.set_config(config, options)
        return configured

    def set_config(self, config: Any, options: OptionsLike = None) -> None:
        """Replace this loader's directly supplied configuration in place.

        An explicit ``config_dir`` always takes precedence over the directory
        of ``config_file``.
        """
        opts = TransformOptions.coerce(options)
        self._options = self._merge_options(options)
        self._override = ConfigData(
            config=copy.deepcopy(config),
            config_dir=opts.resolved_config_dir(),
            config_file=opts.config_file.resolve() if opts.config_file else None,
        )
        logger.debug(
            f"Configuration for '{self.transform_name}' set directly "
            f"(config_dir={self._override.config_dir})"
        )

    def load_config(self, file: str | Path) -> ConfigData:
        """Resolve configuration for a source file.

        Args:
            file: Source file being transformed

        Returns:
            ConfigData; ``config`` is None when no manifest or key exists

        Raises:
            ConfigError: If a manifest or indirected file cannot be loaded
        """
        if self._override is not None:
            return self._override.model_copy(deep=True)

        manifest_result = locate_manifest(file, self.manifest_names)
        if not manifest_result.is_success:
            logger.debug(f"No configuration for '{self.transform_name}': {manifest_result.error}")
            return ConfigData()

        manifest = manifest_result.unwrap()
        raw_value = manifest.data.get(self.transform_name)
        return resolve_config_value(manifest.directory, raw_value)

    async def load_config_async(self, file: str | Path) -> ConfigData:
        """Async variant of ``load_config``.

        Filesystem reads run in the default thread pool executor, so the
        event loop is never blocked.
        """
        if self._override is not None:
            return self._override.model_copy(deep=True)
        return await self._run_in_executor(lambda: self.load_config(file))

    def _merge_options(self, options: OptionsLike) -> TransformOptions:
        if options is None:
            return self._options
        explicit = TransformOptions.coerce(options).model_dump(exclude_unset=True)
        return self._options.model_copy(update=explicit)

    async def _run_in_executor(self, func: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func)

    def __repr__(self) -> str:
        return (
            f"TransformConfigLoader(transform_name={self.transform_name!r}, "
            f"override={self.has_override})"
        )


def load_transform_config(transform_name: str, file: str | Path) -> ConfigData:
    """Resolve ``transform_name``'s configuration for ``file`` from manifests."""
    return TransformConfigLoader(transform_name).load_config(file)


async def load_transform_config_async(transform_name: str, file: str | Path) -> ConfigData:
    """Async variant of ``load_transform_config``."""
    return await TransformConfigLoader(transform_name).load_config_async(file)


__all__ = [
    "TransformConfigLoader",
    "load_transform_config",
    "load_transform_config_async",
]
