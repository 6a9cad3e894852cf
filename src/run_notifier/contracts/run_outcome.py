from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from run_notifier.contracts.run_report import RunReport
from run_notifier.contracts.run_status import RunStatus
from run_notifier.errors import EngineExecutionError


class RunPhase(StrEnum):
    IDLE = "idle"
    INVALIDATING = "invalidating"
    RUNNING = "running"
    EVALUATING = "evaluating"
    FAILED = "failed"
    SKIPPED_NOOP = "skipped_noop"
    UPLOADING = "uploading"
    NOTIFYING = "notifying"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class EngineOk:
    report: RunReport


@dataclass(frozen=True, slots=True)
class EngineErr:
    error: EngineExecutionError


EngineOutcome = EngineOk | EngineErr


@dataclass(frozen=True, slots=True)
class DispatchResult:
    ok: bool
    status_code: int | None = None
    body: str | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """
    Public outcome of run_targets().

    `phases` lists every phase entered, in order, ending with the terminal one.
    """

    run_name: str
    phase: RunPhase
    phases: Sequence[RunPhase]

    started_at_utc: str
    ended_at_utc: str
    duration_s: float

    report: RunReport | None = None
    status: RunStatus | None = None
    dispatch: DispatchResult | None = None
    uploaded: Sequence[str] = field(default_factory=tuple)

    # Human-readable message for quick debugging
    error: str | None = None
