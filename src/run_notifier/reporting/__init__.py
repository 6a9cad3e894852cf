"""Outcome classification for run reports."""

from run_notifier.reporting.classifier import (
    FAILED_STATUS,
    SKIPPED_STATUS,
    SUCCESS_STATUS,
    classify_report,
)

__all__ = ["FAILED_STATUS", "SKIPPED_STATUS", "SUCCESS_STATUS", "classify_report"]
