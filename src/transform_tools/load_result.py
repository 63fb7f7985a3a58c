"""LoadResult for manifest lookups.

Walking up the directory tree without finding a manifest is an expected
outcome, not an error, so the locator reports it as a failed result instead of
raising. Both outcomes record the directories that were searched.

For configuration errors (unreadable or malformed files), see
``transform_tools.exceptions``.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Generic, TypeVar

from .exceptions import ErrorKind

T = TypeVar("T")


class LoadStatus(str, Enum):
    """Status of a lookup."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadResult(Generic[T]):  # noqa: UP046
    """
    Outcome of a manifest lookup.

    Usage:
        result = locate_manifest("src/index.js")
        if result.is_success:
            manifest = result.value
        else:
            print(f"{result.kind}: {result.error} (searched {len(result.searched)} dirs)")
    """

    status: LoadStatus
    value: T | None = None
    error: str | None = None
    kind: ErrorKind | None = None
    searched: tuple[Path, ...] = ()

    def __post_init__(self) -> None:
        if self.status == LoadStatus.SUCCESS and self.value is None:
            raise ValueError("Success result must have a value")
        if self.status == LoadStatus.FAILED and not self.error:
            raise ValueError("Failed result must have an error message")

    @property
    def is_success(self) -> bool:
        return self.status == LoadStatus.SUCCESS

    @classmethod
    def success(cls, value: T, searched: tuple[Path, ...] = ()) -> "LoadResult[T]":
        return cls(status=LoadStatus.SUCCESS, value=value, searched=searched)

    @classmethod
    def failure(
        cls, error: str, kind: ErrorKind, searched: tuple[Path, ...] = ()
    ) -> "LoadResult[T]":
        return cls(status=LoadStatus.FAILED, error=error, kind=kind, searched=searched)

    def unwrap(self) -> T:
        """Get value or raise ValueError if the lookup failed."""
        if not self.is_success or self.value is None:
            raise ValueError(f"Cannot unwrap failed result: {self.error}")
        return self.value
