from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RunContext:
    """
    Parameters for one orchestrated run.

    Every entry in upload_targets must name a step of the same run's report.
    """

    run_name: str
    project_name: str
    container_url: str
    upload_targets: tuple[str, ...] = field(default_factory=tuple)
    invalidate: bool = False
    forced: bool = False

    @property
    def blob_path(self) -> str:
        return f"{self.project_name}/{self.run_name}"
