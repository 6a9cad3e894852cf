from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Literal

ReportField = Literal["name", "progress", "seconds", "minutes"]

MISSING_MINUTES = "-"


class StepProgress(StrEnum):
    COMPLETED = "completed"
    ERRORED = "errored"
    SKIPPED = "skipped"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | StepProgress) -> StepProgress:
        """Map an engine progress value onto the enum; unknown values become OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True, slots=True)
class StepResult:
    """Outcome of a single step as reported by the execution engine."""

    name: str
    progress: StepProgress
    seconds: float | None = None

    @property
    def minutes(self) -> str:
        if self.progress is not StepProgress.COMPLETED or self.seconds is None:
            return MISSING_MINUTES
        return f"{round(self.seconds / 60, 1):.1f}"


@dataclass(frozen=True, slots=True)
class RunReport:
    """
    Ordered per-step outcomes for one run.

    Row order is the engine's order and is never re-sorted.
    """

    steps: tuple[StepResult, ...] = field(default_factory=tuple)

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]]) -> RunReport:
        steps = []
        for row in rows:
            seconds = row.get("seconds")
            steps.append(
                StepResult(
                    name=str(row["name"]),
                    progress=StepProgress.parse(row["progress"]),
                    seconds=float(seconds) if seconds is not None else None,
                )
            )
        return cls(steps=tuple(steps))

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    @property
    def names(self) -> list[str]:
        return [step.name for step in self.steps]

    def field_values(self, field_name: ReportField) -> list[str | None]:
        """Return one value per row for a report column, None where unavailable."""
        values: list[str | None] = []
        for step in self.steps:
            if field_name == "name":
                values.append(step.name)
            elif field_name == "progress":
                values.append(step.progress.value)
            elif field_name == "minutes":
                values.append(step.minutes)
            elif field_name == "seconds":
                values.append(None if step.seconds is None else str(step.seconds))
            else:
                raise KeyError(f"Unknown report field: {field_name}")
        return values

    def has_errors(self) -> bool:
        return any(step.progress is StepProgress.ERRORED for step in self.steps)

    def all_skipped(self) -> bool:
        # all() over an empty report is True; callers decide what that means.
        return all(step.progress is StepProgress.SKIPPED for step in self.steps)

    def to_frame(self):
        """Return the report as a pandas DataFrame (name, progress, seconds, minutes)."""
        import pandas as pd

        return pd.DataFrame(
            {
                "name": [step.name for step in self.steps],
                "progress": [step.progress.value for step in self.steps],
                "seconds": [step.seconds for step in self.steps],
                "minutes": [step.minutes for step in self.steps],
            },
            columns=["name", "progress", "seconds", "minutes"],
        )
