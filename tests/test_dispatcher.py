import json
import logging

import pytest
import requests

from run_notifier.contracts import Member
from run_notifier.errors import DirectoryError, UserNotFoundError
from run_notifier.messaging import ChatPayload, TeamsNotifier
from run_notifier.testkit import FakeDirectory, FakeTeam


class _FakeResponse:
    def __init__(self, status_code: int, text: str = "") -> None:
        self.status_code = status_code
        self.text = text


class _FakeHttp:
    def __init__(self, response: _FakeResponse | None = None, error: Exception | None = None):
        self.response = response or _FakeResponse(201, "{}")
        self.error = error
        self.posts: list[dict[str, object]] = []

    def post(self, url, *, data, headers, timeout):
        self.posts.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def _directory() -> FakeDirectory:
    team = FakeTeam(
        team_id="team-42",
        channels={"Bots Health Check": "chan-7"},
        members={"a@x.com": Member(display_name="Ada", user_id="user-a")},
        token="tok-123",
    )
    return FakeDirectory({"Insights": team})


@pytest.mark.parametrize("status_code", [200, 201])
def test_send_posts_json_to_channel_endpoint(status_code):
    http = _FakeHttp(_FakeResponse(status_code, '{"id": "m1"}'))
    notifier = TeamsNotifier(_directory(), http=http, timeout_s=5)

    result = notifier.send(ChatPayload.from_text("hello"))

    assert result.ok is True
    assert result.status_code == status_code
    (post,) = http.posts
    assert post["url"] == (
        "https://graph.microsoft.com/v1.0/teams/team-42/channels/chan-7/messages"
    )
    assert post["headers"] == {
        "Authorization": "Bearer tok-123",
        "Content-Type": "application/json",
    }
    assert post["timeout"] == 5
    assert json.loads(post["data"]) == {"body": {"content": "hello"}}


def test_rejected_post_is_logged_and_not_raised(caplog):
    http = _FakeHttp(_FakeResponse(403, "Forbidden: no posting rights"))
    notifier = TeamsNotifier(_directory(), http=http)

    with caplog.at_level(logging.ERROR, logger="run_notifier.messaging.dispatcher"):
        result = notifier.send(ChatPayload.from_text("hello"))

    assert result.ok is False
    assert result.status_code == 403
    assert result.body == "Forbidden: no posting rights"
    assert "Forbidden: no posting rights" in caplog.text


def test_transport_failure_is_logged_and_not_raised(caplog):
    http = _FakeHttp(error=requests.ConnectionError("connection refused"))
    notifier = TeamsNotifier(_directory(), http=http)

    with caplog.at_level(logging.ERROR, logger="run_notifier.messaging.dispatcher"):
        result = notifier.send(ChatPayload.from_text("hello"))

    assert result.ok is False
    assert result.status_code is None
    assert "connection refused" in result.error
    assert "connection refused" in caplog.text


def test_pings_are_resolved_before_posting():
    http = _FakeHttp()
    notifier = TeamsNotifier(_directory(), http=http)

    notifier.send_message("build broke", pings=["a@x.com"])

    body = json.loads(http.posts[0]["data"])
    assert body["body"]["contentType"] == "html"
    assert '<at id="1">Ada</at>' in body["body"]["content"]
    assert body["mentions"][0]["mentioned"]["user"]["id"] == "user-a"


def test_unknown_ping_aborts_before_posting():
    http = _FakeHttp()
    notifier = TeamsNotifier(_directory(), http=http)

    with pytest.raises(UserNotFoundError):
        notifier.send_message("hello", pings=["nobody@x.com"])

    assert http.posts == []


def test_unknown_channel_raises_directory_error():
    notifier = TeamsNotifier(_directory(), http=_FakeHttp())

    with pytest.raises(DirectoryError):
        notifier.send_message("hello", channel_name="General")


def test_custom_api_url_is_used_for_endpoint():
    http = _FakeHttp()
    notifier = TeamsNotifier(_directory(), http=http, api_url="https://graph.example/beta/")

    notifier.send_message("hello")

    assert http.posts[0]["url"] == "https://graph.example/beta/teams/team-42/channels/chan-7/messages"
