"""Adaptive card documents and the builders that render run reports into them."""

from run_notifier.cards.builder import (
    build_card_payload,
    build_column_items,
    build_project_card,
    progress_color,
)
from run_notifier.cards.models import AdaptiveCard, CardItem, Column, ColumnSet, Container, TextBlock

__all__ = [
    "AdaptiveCard",
    "CardItem",
    "Column",
    "ColumnSet",
    "Container",
    "TextBlock",
    "build_card_payload",
    "build_column_items",
    "build_project_card",
    "progress_color",
]
