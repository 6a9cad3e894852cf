from __future__ import annotations

from collections.abc import Sequence

from run_notifier.cards.models import AdaptiveCard, CardItem, Color, Column, ColumnSet, Container, TextBlock
from run_notifier.contracts.run_report import ReportField, RunReport, StepProgress
from run_notifier.messaging.payload import ChatAttachment, ChatPayload, ItemBody
from run_notifier.reporting.classifier import classify_report

ATTACHMENT_ID = "1"
ATTACHMENT_PLACEHOLDER = f'<attachment id="{ATTACHMENT_ID}"></attachment>'
MISSING_VALUE = "-"
REPORT_COLUMNS: tuple[ReportField, ...] = ("name", "progress", "minutes")


def progress_color(value: str | None) -> Color:
    match value:
        case StepProgress.ERRORED:
            return "attention"
        case StepProgress.SKIPPED:
            return "accent"
        case StepProgress.COMPLETED:
            return "good"
        case _:
            return "default"


def build_column_items(report: RunReport, field_name: ReportField) -> list[TextBlock]:
    """Header cell followed by one cell per report row, in report order."""
    header = TextBlock(text=field_name, weight="bolder")
    cells = [
        TextBlock(
            text=MISSING_VALUE if value is None else value,
            spacing="none",
            color=progress_color(value),
        )
        for value in report.field_values(field_name)
    ]
    return [header, *cells]


def build_card_payload(card_items: Sequence[CardItem]) -> ChatPayload:
    """
    Wrap card items in an accent container and attach the card to a message.

    The card is serialised on its own first; the attachment carries that string.
    """
    card = AdaptiveCard(
        body=[Container(style="accent", bleed=True, items=list(card_items))],
    )
    return ChatPayload(
        body=ItemBody(content_type="html", content=ATTACHMENT_PLACEHOLDER),
        attachments=[ChatAttachment(id=ATTACHMENT_ID, content=card.to_json())],
    )


def build_project_card(run_name: str, project_name: str, report: RunReport) -> ChatPayload:
    status = classify_report(report)
    card_items: list[CardItem] = [
        # Run name
        TextBlock(text=f"{project_name}/{run_name}", size="medium", weight="bolder"),
        # Run status
        TextBlock(
            text=status.label,
            size="large",
            weight="bolder",
            spacing="none",
            color=status.color,
        ),
        ColumnSet(
            columns=[Column(items=build_column_items(report, name)) for name in REPORT_COLUMNS]
        ),
    ]
    return build_card_payload(card_items)
