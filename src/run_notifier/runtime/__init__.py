"""Runtime helpers for orchestration."""

from run_notifier.runtime.artifacts import container_dir, default_store_root
from run_notifier.runtime.console import SeverityColorFormatter, configure_logging

__all__ = [
    "SeverityColorFormatter",
    "configure_logging",
    "container_dir",
    "default_store_root",
]
