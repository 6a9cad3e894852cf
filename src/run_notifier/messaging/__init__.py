"""Teams message payloads, mentions and delivery."""

from run_notifier.messaging.dispatcher import TeamsNotifier
from run_notifier.messaging.graph import GraphDirectory, GraphSession, GraphTeam
from run_notifier.messaging.mentions import add_pings
from run_notifier.messaging.payload import (
    ChatAttachment,
    ChatMention,
    ChatPayload,
    ItemBody,
)

__all__ = [
    "ChatAttachment",
    "ChatMention",
    "ChatPayload",
    "GraphDirectory",
    "GraphSession",
    "GraphTeam",
    "ItemBody",
    "TeamsNotifier",
    "add_pings",
]
