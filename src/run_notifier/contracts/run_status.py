from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

StatusLabel = Literal["FAILED", "Skipped", "SUCCESS"]


@dataclass(frozen=True, slots=True)
class RunStatus:
    label: StatusLabel
    color: str
