from __future__ import annotations

import logging
import sys
from typing import TextIO

_RESET = "\033[0m"
_LEVEL_STYLES = {
    logging.DEBUG: "\033[2m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33;1m",
    logging.ERROR: "\033[31;1m",
    logging.CRITICAL: "\033[31;1m",
}


class SeverityColorFormatter(logging.Formatter):
    """Colour whole log lines by severity when writing to a terminal."""

    def __init__(self, fmt: str | None = None, *, use_color: bool = True) -> None:
        super().__init__(fmt or "%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        if not self.use_color:
            return line
        style = _LEVEL_STYLES.get(record.levelno)
        if style is None:
            return line
        return f"{style}{line}{_RESET}"


def configure_logging(
    level: int = logging.INFO,
    *,
    stream: TextIO | None = None,
    use_color: bool | None = None,
) -> logging.Handler:
    """Attach a single console handler to the run_notifier logger tree."""
    output = stream if stream is not None else sys.stderr
    if use_color is None:
        use_color = bool(getattr(output, "isatty", lambda: False)())

    handler = logging.StreamHandler(output)
    handler.setFormatter(SeverityColorFormatter(use_color=use_color))

    root = logging.getLogger("run_notifier")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
    return handler
