from __future__ import annotations

from collections.abc import Mapping

from run_notifier.contracts.directory import Channel, Member
from run_notifier.errors import DirectoryError, UserNotFoundError


class FakeTeam:
    def __init__(
        self,
        *,
        team_id: str = "team-1",
        channels: Mapping[str, str] | None = None,
        members: Mapping[str, Member] | None = None,
        token: str = "fake-token",
    ) -> None:
        self.team_id = team_id
        self._channels = dict(channels or {})
        self._members = dict(members or {})
        self._token = token
        self.member_lookups: list[str] = []

    def get_channel(self, channel_name: str) -> Channel:
        try:
            channel_id = self._channels[channel_name]
        except KeyError as e:
            raise DirectoryError(f"Channel '{channel_name}' not found") from e
        return Channel(team_id=self.team_id, channel_id=channel_id, bearer_token=self._token)

    def get_member(self, *, email: str) -> Member:
        self.member_lookups.append(email)
        try:
            return self._members[email]
        except KeyError as e:
            raise UserNotFoundError(email) from e


class FakeDirectory:
    def __init__(self, teams: Mapping[str, FakeTeam]) -> None:
        self.teams = dict(teams)

    def get_team(self, team_name: str) -> FakeTeam:
        try:
            return self.teams[team_name]
        except KeyError as e:
            raise DirectoryError(f"Team '{team_name}' not found") from e
