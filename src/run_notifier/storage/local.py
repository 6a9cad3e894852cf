from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any

from run_notifier.errors import UploadError
from run_notifier.runtime.artifacts import container_dir

logger = logging.getLogger("run_notifier.storage.local")


class LocalArtifactStore:
    """
    ArtifactStore that writes into a directory tree.

    Objects are pickled with joblib; folders are copied as-is.
    """

    def __init__(self, *, store_root: Path | None = None) -> None:
        self._store_root = store_root

    def resolve(self, path: str, container_url: str) -> Path:
        base = container_dir(container_url, store_root=self._store_root)
        target = (base / path).resolve()
        if not target.is_relative_to(base.resolve()):
            raise UploadError(f"Path '{path}' escapes container '{container_url}'")
        return target

    def store_object(self, obj: Any, path: str, container_url: str, *, forced: bool) -> None:
        import joblib

        target = self.resolve(path, container_url)
        self._check_overwrite(target, forced=forced)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            joblib.dump(obj, target)
        except OSError as exc:
            raise UploadError(f"Failed to store object at {target}: {exc}") from exc
        logger.debug("Stored object at %s", target)

    def store_folder(
        self,
        local_path: str | Path,
        remote_path: str,
        container_url: str,
        *,
        forced: bool,
    ) -> None:
        source = Path(local_path)
        if not source.is_dir():
            raise UploadError(f"Local folder not found: {source}")

        target = self.resolve(remote_path, container_url)
        self._check_overwrite(target, forced=forced)
        try:
            if target.exists():
                shutil.rmtree(target)
            shutil.copytree(source, target)
        except OSError as exc:
            raise UploadError(f"Failed to store folder {source} at {target}: {exc}") from exc
        logger.debug("Stored folder %s at %s", source, target)

    @staticmethod
    def _check_overwrite(target: Path, *, forced: bool) -> None:
        if target.exists() and not forced:
            raise UploadError(f"{target} already exists; use forced=True to overwrite")
