from __future__ import annotations

import logging
from collections.abc import Sequence

import requests

from run_notifier.contracts.directory import Channel, Directory
from run_notifier.contracts.run_outcome import DispatchResult
from run_notifier.errors import DispatchError
from run_notifier.messaging.graph import GRAPH_API_URL
from run_notifier.messaging.mentions import add_pings
from run_notifier.messaging.payload import ChatPayload

logger = logging.getLogger("run_notifier.messaging.dispatcher")

DEFAULT_TEAM_NAME = "Insights"
DEFAULT_CHANNEL_NAME = "Bots Health Check"
SUCCESS_STATUS_CODES = frozenset({200, 201})


class TeamsNotifier:
    """
    Post chat messages to a Teams channel through the Graph API.

    Posting uses the channel token handed out by the directory, so a message can
    only go where the acting user is allowed to post.
    """

    def __init__(
        self,
        directory: Directory,
        *,
        api_url: str = GRAPH_API_URL,
        http: requests.Session | None = None,
        timeout_s: float = 30.0,
    ) -> None:
        self._directory = directory
        self._api_url = api_url.rstrip("/")
        self._http = http or requests.Session()
        self._timeout_s = timeout_s

    def send(
        self,
        payload: ChatPayload,
        *,
        channel_name: str = DEFAULT_CHANNEL_NAME,
        team_name: str = DEFAULT_TEAM_NAME,
        pings: Sequence[str] | None = None,
    ) -> DispatchResult:
        """
        Send a payload, optionally mentioning `pings` (emails, case sensitive).

        Directory lookups (including unknown pings) raise; a rejected or failed
        post is logged and reported through the returned DispatchResult.
        """
        team = self._directory.get_team(team_name)
        channel = team.get_channel(channel_name)

        if pings:
            payload = add_pings(payload, pings, team)

        try:
            status_code, body = self._post(channel, payload)
        except DispatchError as exc:
            logger.error(
                "Failed to send message: %s",
                exc,
                extra={"event": "dispatch_failed", "channel": channel_name, "team": team_name},
            )
            return DispatchResult(ok=False, error=str(exc))

        if status_code in SUCCESS_STATUS_CODES:
            logger.info(
                "Message sent.",
                extra={"event": "dispatch_ok", "channel": channel_name, "team": team_name},
            )
            return DispatchResult(ok=True, status_code=status_code, body=body)

        logger.error(
            "Failed to send message: %s",
            body,
            extra={
                "event": "dispatch_rejected",
                "status_code": status_code,
                "channel": channel_name,
                "team": team_name,
            },
        )
        return DispatchResult(
            ok=False,
            status_code=status_code,
            body=body,
            error=f"HTTP {status_code}",
        )

    def send_message(
        self,
        message_text: str,
        *,
        channel_name: str = DEFAULT_CHANNEL_NAME,
        team_name: str = DEFAULT_TEAM_NAME,
        pings: Sequence[str] | None = None,
    ) -> DispatchResult:
        """Send a plain text message."""
        return self.send(
            ChatPayload.from_text(message_text),
            channel_name=channel_name,
            team_name=team_name,
            pings=pings,
        )

    def messages_url(self, channel: Channel) -> str:
        return f"{self._api_url}/teams/{channel.team_id}/channels/{channel.channel_id}/messages"

    def _post(self, channel: Channel, payload: ChatPayload) -> tuple[int, str]:
        try:
            response = self._http.post(
                self.messages_url(channel),
                data=payload.to_json().encode("utf-8"),
                headers={
                    "Authorization": f"Bearer {channel.bearer_token}",
                    "Content-Type": "application/json",
                },
                timeout=self._timeout_s,
            )
        except requests.RequestException as exc:
            raise DispatchError(f"Transport failure: {exc}") from exc
        return int(response.status_code), response.text
