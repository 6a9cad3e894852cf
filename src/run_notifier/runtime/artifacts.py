from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import unquote, urlparse

STORE_ROOT_ENV = "RUN_NOTIFIER_STORE_ROOT"


def default_store_root() -> Path:
    """`$RUN_NOTIFIER_STORE_ROOT` when set, else `.blobs` under the working directory."""
    env_value = os.environ.get(STORE_ROOT_ENV)
    if env_value:
        return Path(env_value).expanduser()
    return Path.cwd() / ".blobs"


def container_dir(container_url: str, *, store_root: Path | None = None) -> Path:
    """
    Map a container URL onto a local directory.

    `file://` URLs and plain paths are used as-is; anything else (for example an
    https blob container) is mirrored under the store root by host and path.
    """
    parsed = urlparse(container_url)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    if not parsed.scheme or len(parsed.scheme) == 1:
        # No scheme, or a Windows drive letter.
        return Path(container_url).expanduser()

    root = store_root if store_root is not None else default_store_root()
    parts = [parsed.netloc, *[part for part in parsed.path.split("/") if part]]
    return root.joinpath(*parts)
