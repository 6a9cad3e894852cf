from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ADAPTIVE_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class ItemBody(_WireModel):
    content: str
    content_type: Literal["text", "html"] | None = Field(default=None, alias="contentType")


class ChatAttachment(_WireModel):
    id: str
    content_type: str = Field(default=ADAPTIVE_CARD_CONTENT_TYPE, alias="contentType")
    # Already-serialised document, not a nested structure.
    content: str


class MentionedUser(_WireModel):
    display_name: str = Field(alias="displayName")
    id: str


class MentionedIdentity(_WireModel):
    user: MentionedUser


class ChatMention(_WireModel):
    id: int
    mention_text: str = Field(alias="mentionText")
    mentioned: MentionedIdentity

    @classmethod
    def for_user(cls, sequence_id: int, display_name: str, user_id: str) -> ChatMention:
        return cls(
            id=sequence_id,
            mention_text=display_name,
            mentioned=MentionedIdentity(user=MentionedUser(display_name=display_name, id=user_id)),
        )

    @property
    def sequence_id(self) -> int:
        return self.id

    @property
    def display_name(self) -> str:
        return self.mention_text

    @property
    def platform_user_id(self) -> str:
        return self.mentioned.user.id

    def markup(self) -> str:
        return f'<at id="{self.id}">{self.mention_text}</at>'


class ChatPayload(_WireModel):
    """
    Body of a Graph chatMessage post.

    See https://learn.microsoft.com/en-us/graph/api/chatmessage-post
    """

    body: ItemBody
    attachments: list[ChatAttachment] | None = None
    mentions: list[ChatMention] | None = None

    @classmethod
    def from_text(cls, text: str) -> ChatPayload:
        return cls(body=ItemBody(content=text))

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)
