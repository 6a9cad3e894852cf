from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class Channel:
    team_id: str
    channel_id: str
    bearer_token: str


@dataclass(frozen=True, slots=True)
class Member:
    display_name: str
    user_id: str


@runtime_checkable
class Team(Protocol):
    def get_channel(self, channel_name: str) -> Channel:
        """Return the named channel with a token scoped to the acting user."""
        ...

    def get_member(self, *, email: str) -> Member:
        """Return the member with this email (case sensitive) or raise UserNotFoundError."""
        ...


@runtime_checkable
class Directory(Protocol):
    def get_team(self, team_name: str) -> Team:
        """Return the named team or raise DirectoryError."""
        ...
