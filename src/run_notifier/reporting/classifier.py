from __future__ import annotations

from run_notifier.contracts.run_report import RunReport
from run_notifier.contracts.run_status import RunStatus

FAILED_STATUS = RunStatus(label="FAILED", color="attention")
SKIPPED_STATUS = RunStatus(label="Skipped", color="warning")
SUCCESS_STATUS = RunStatus(label="SUCCESS", color="good")


def classify_report(report: RunReport) -> RunStatus:
    """
    Reduce a run report to an overall status. First match wins:

    1. any errored step -> FAILED
    2. every step skipped -> Skipped
    3. otherwise -> SUCCESS (this includes an empty report)
    """
    if report.has_errors():
        return FAILED_STATUS
    if len(report) > 0 and report.all_skipped():
        return SKIPPED_STATUS
    return SUCCESS_STATUS
