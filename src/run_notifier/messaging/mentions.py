from __future__ import annotations

import logging
from collections.abc import Sequence

from run_notifier.contracts.directory import Team
from run_notifier.errors import UserNotFoundError
from run_notifier.messaging.payload import ChatMention, ChatPayload, ItemBody

logger = logging.getLogger("run_notifier.messaging.mentions")

MENTION_SEPARATOR = ", "


def add_pings(payload: ChatPayload, pings: Sequence[str] | None, team: Team) -> ChatPayload:
    """
    Return a copy of `payload` that mentions every user in `pings`.

    Users are looked up by email (case sensitive) in the order given; mention ids
    are their 1-based positions. Any unknown user aborts the whole call.
    """
    if not pings:
        return payload

    mentions: list[ChatMention] = []
    for sequence_id, email in enumerate(pings, start=1):
        try:
            member = team.get_member(email=email)
        except UserNotFoundError:
            logger.error(
                "Can not find user '%s', check the email address (case sensitive)",
                email,
                extra={"event": "mention_lookup_failed", "identifier": email},
            )
            raise
        mentions.append(ChatMention.for_user(sequence_id, member.display_name, member.user_id))

    mention_html = MENTION_SEPARATOR.join(mention.markup() for mention in mentions)
    body = ItemBody(
        content_type="html",
        content=f"<p>Ping {mention_html}</p><br><p>{payload.body.content}</p>",
    )
    return payload.model_copy(update={"body": body, "mentions": mentions})
