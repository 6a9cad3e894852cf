from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

CARD_SCHEMA_URL = "http://adaptivecards.io/schemas/adaptive-card.json"
CARD_VERSION = "1.5"

Color = Literal["default", "dark", "light", "accent", "good", "warning", "attention"]
Size = Literal["small", "default", "medium", "large", "extraLarge"]
Weight = Literal["lighter", "default", "bolder"]
Spacing = Literal["none", "small", "default", "medium", "large", "extraLarge", "padding"]
ContainerStyle = Literal["default", "emphasis", "good", "attention", "warning", "accent"]


class _CardElement(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class TextBlock(_CardElement):
    type: Literal["TextBlock"] = "TextBlock"
    text: str
    size: Size | None = None
    weight: Weight | None = None
    color: Color | None = None
    spacing: Spacing | None = None
    wrap: bool | None = None


class Column(_CardElement):
    type: Literal["Column"] = "Column"
    items: list[CardItem] = Field(default_factory=list)
    width: str | None = None


class ColumnSet(_CardElement):
    type: Literal["ColumnSet"] = "ColumnSet"
    columns: list[Column] = Field(default_factory=list)
    spacing: Spacing | None = None


class Container(_CardElement):
    type: Literal["Container"] = "Container"
    items: list[CardItem] = Field(default_factory=list)
    style: ContainerStyle | None = None
    bleed: bool | None = None


CardItem = Annotated[
    Union[TextBlock, Container, ColumnSet, Column],
    Field(discriminator="type"),
]


class AdaptiveCard(_CardElement):
    schema_url: str = Field(default=CARD_SCHEMA_URL, alias="$schema")
    type: Literal["AdaptiveCard"] = "AdaptiveCard"
    version: str = CARD_VERSION
    body: list[CardItem] = Field(default_factory=list)

    def to_json(self) -> str:
        """Serialise the card on its own, ready to embed as an attachment string."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


Column.model_rebuild()
ColumnSet.model_rebuild()
Container.model_rebuild()
AdaptiveCard.model_rebuild()
