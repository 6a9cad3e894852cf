from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from run_notifier.errors import UploadError


@dataclass(frozen=True, slots=True)
class StoreCall:
    """Record of a store call for assertions in tests."""

    name: str
    path: str
    container_url: str
    forced: bool
    payload: Any = None


class FakeArtifactStore:
    """
    In-memory ArtifactStore for unit tests.

    Paths listed in `fail_on` raise UploadError instead of being stored.
    """

    def __init__(self, *, fail_on: set[str] | None = None) -> None:
        self._fail_on = set(fail_on or ())
        self._calls: list[StoreCall] = []
        self.objects: dict[str, Any] = {}

    @property
    def calls(self) -> list[StoreCall]:
        """Return the recorded calls in order."""
        return list(self._calls)

    @property
    def paths(self) -> list[str]:
        return [call.path for call in self._calls]

    def store_object(self, obj: Any, path: str, container_url: str, *, forced: bool) -> None:
        self._maybe_fail(path)
        self._calls.append(StoreCall("store_object", path, container_url, forced, obj))
        self.objects[path] = obj

    def store_folder(
        self,
        local_path: str | Path,
        remote_path: str,
        container_url: str,
        *,
        forced: bool,
    ) -> None:
        self._maybe_fail(remote_path)
        self._calls.append(
            StoreCall("store_folder", remote_path, container_url, forced, str(local_path))
        )

    def _maybe_fail(self, path: str) -> None:
        if path in self._fail_on:
            raise UploadError(f"Simulated upload failure for {path}")
