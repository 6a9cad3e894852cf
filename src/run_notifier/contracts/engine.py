from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from run_notifier.contracts.run_report import RunReport


@runtime_checkable
class ExecutionEngine(Protocol):
    """
    Facade contract for the dependency-graph engine that runs the steps.
    """

    def invalidate_all(self) -> None:
        """Discard every cached step result so the next run recomputes them."""
        ...

    def run(self) -> None:
        """Execute the step graph. May raise."""
        ...

    def progress(self) -> RunReport:
        """Return the per-step outcome of the latest run."""
        ...

    def read_artifact(self, step_name: str) -> Any:
        """Return the raw value computed by a step."""
        ...
