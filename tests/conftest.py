"""Shared test configuration for transform-tools tests.

Provides:
- Isolation from the TRANSFORM_TOOLS_MANIFEST environment variable
- A project tree factory writing manifests and config files under tmp_path
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# A manifest name no real directory above tmp_path will contain
ISOLATED_MANIFEST = "transform-tools-test-manifest.json"


@pytest.fixture(autouse=True)
def clear_manifest_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests never pick up a manifest override from the caller's shell."""
    monkeypatch.delenv("TRANSFORM_TOOLS_MANIFEST", raising=False)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Resolved project root (tmp_path may sit behind a symlink)."""
    return tmp_path.resolve()


@pytest.fixture
def write_file(project: Path) -> Callable[[str, Any], Path]:
    """Write a file under the project root.

    Dicts and lists are serialized as JSON, strings are written verbatim.

    Usage:
        write_file("package.json", {"envify": {"A": 1}})
        write_file("src/index.js", "require('./x')")
    """

    def _write(relative: str, content: Any) -> Path:
        path = project / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
