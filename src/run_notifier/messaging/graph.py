from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from run_notifier.contracts.directory import Channel, Member
from run_notifier.errors import DirectoryError, UserNotFoundError

logger = logging.getLogger("run_notifier.messaging.graph")

GRAPH_API_URL = "https://graph.microsoft.com/v1.0"


@dataclass(frozen=True)
class GraphSession:
    """
    Explicit credential handle for Graph calls made on behalf of one user.

    Token acquisition and refresh happen outside this package.
    """

    access_token: str
    api_url: str = GRAPH_API_URL
    timeout_s: float = 30.0

    def get(self, http: requests.Session, path: str, *, params: dict[str, str] | None = None) -> Any:
        url = f"{self.api_url.rstrip('/')}/{path.lstrip('/')}"
        try:
            response = http.get(
                url,
                params=params,
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=self.timeout_s,
            )
        except requests.RequestException as exc:
            raise DirectoryError(f"Graph request failed for {path}: {exc}") from exc
        if response.status_code != 200:
            raise DirectoryError(
                f"Graph request for {path} returned HTTP {response.status_code}: {response.text}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise DirectoryError(f"Graph response for {path} is not valid JSON: {exc}") from exc

    def get_collection(
        self,
        http: requests.Session,
        path: str,
        *,
        params: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        payload = self.get(http, path, params=params)
        items = list(payload.get("value", []))
        next_link = payload.get("@odata.nextLink")
        while next_link:
            payload = self.get(http, next_link.removeprefix(self.api_url.rstrip("/")))
            items.extend(payload.get("value", []))
            next_link = payload.get("@odata.nextLink")
        return items


class GraphTeam:
    def __init__(
        self,
        *,
        team_id: str,
        display_name: str,
        session: GraphSession,
        http: requests.Session,
    ) -> None:
        self.team_id = team_id
        self.display_name = display_name
        self._session = session
        self._http = http

    def get_channel(self, channel_name: str) -> Channel:
        channels = self._session.get_collection(self._http, f"teams/{self.team_id}/channels")
        for channel in channels:
            if channel.get("displayName") == channel_name:
                return Channel(
                    team_id=self.team_id,
                    channel_id=str(channel["id"]),
                    bearer_token=self._session.access_token,
                )
        raise DirectoryError(f"Channel '{channel_name}' not found in team '{self.display_name}'")

    def get_member(self, *, email: str) -> Member:
        members = self._session.get_collection(self._http, f"teams/{self.team_id}/members")
        for member in members:
            if member.get("email") == email:
                return Member(
                    display_name=str(member.get("displayName") or email),
                    user_id=str(member["userId"]),
                )
        raise UserNotFoundError(email)


class GraphDirectory:
    """Directory backed by the Graph teams/channels/members endpoints."""

    def __init__(self, session: GraphSession, *, http: requests.Session | None = None) -> None:
        self._session = session
        self._http = http or requests.Session()

    def get_team(self, team_name: str) -> GraphTeam:
        teams = self._session.get_collection(self._http, "me/joinedTeams")
        for team in teams:
            if team.get("displayName") == team_name:
                logger.debug("Resolved team '%s' to %s", team_name, team["id"])
                return GraphTeam(
                    team_id=str(team["id"]),
                    display_name=team_name,
                    session=self._session,
                    http=self._http,
                )
        raise DirectoryError(f"Team '{team_name}' not found among the user's joined teams")
