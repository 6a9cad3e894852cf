from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ArtifactStore(Protocol):
    """
    Facade contract for the blob storage that keeps run outputs.

    Implementations raise UploadError on failure.
    """

    def store_object(self, obj: Any, path: str, container_url: str, *, forced: bool) -> None:
        """Persist a single object at `path` inside the container."""
        ...

    def store_folder(
        self,
        local_path: str | Path,
        remote_path: str,
        container_url: str,
        *,
        forced: bool,
    ) -> None:
        """Persist a whole local folder under `remote_path` inside the container."""
        ...
