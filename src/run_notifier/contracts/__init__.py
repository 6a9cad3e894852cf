from .directory import Channel, Directory, Member, Team
from .engine import ExecutionEngine
from .run_context import RunContext
from .run_outcome import (
    DispatchResult,
    EngineErr,
    EngineOk,
    EngineOutcome,
    RunOutcome,
    RunPhase,
)
from .run_report import StepProgress, StepResult, RunReport
from .run_status import RunStatus
from .storage import ArtifactStore

__all__ = [
    "ArtifactStore",
    "Channel",
    "Directory",
    "DispatchResult",
    "EngineErr",
    "EngineOk",
    "EngineOutcome",
    "ExecutionEngine",
    "Member",
    "RunContext",
    "RunOutcome",
    "RunPhase",
    "RunReport",
    "RunStatus",
    "StepProgress",
    "StepResult",
    "Team",
]
