from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from run_notifier.contracts.run_report import RunReport


@dataclass(frozen=True, slots=True)
class EngineCall:
    name: str
    args: tuple[Any, ...] = ()


class FakeExecutionEngine:
    """
    Scripted ExecutionEngine for unit tests.

    `rows` become the report returned by progress(); `run_error` is raised by run().
    """

    def __init__(
        self,
        rows: Iterable[Mapping[str, Any]] = (),
        *,
        artifacts: Mapping[str, Any] | None = None,
        run_error: Exception | None = None,
    ) -> None:
        self._report = RunReport.from_rows(rows)
        self._artifacts = dict(artifacts or {})
        self._run_error = run_error
        self._calls: list[EngineCall] = []

    @property
    def calls(self) -> list[EngineCall]:
        return list(self._calls)

    @property
    def call_names(self) -> list[str]:
        return [call.name for call in self._calls]

    def invalidate_all(self) -> None:
        self._calls.append(EngineCall("invalidate_all"))

    def run(self) -> None:
        self._calls.append(EngineCall("run"))
        if self._run_error is not None:
            raise self._run_error

    def progress(self) -> RunReport:
        self._calls.append(EngineCall("progress"))
        return self._report

    def read_artifact(self, step_name: str) -> Any:
        self._calls.append(EngineCall("read_artifact", (step_name,)))
        try:
            return self._artifacts[step_name]
        except KeyError:
            return {"step": step_name}
