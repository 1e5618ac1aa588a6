"""Tests for the best-effort Google context snapshot."""

import http.client

from app.core.context_fetcher import fetch_context
from app.models.google import TokenPair
from conftest import FakeAccountClient

TOKENS = TokenPair(access_token="ya29.token")


def test_full_snapshot(sample_user, sample_events):
    client = FakeAccountClient(user=sample_user, events=sample_events)
    snapshot = fetch_context(TOKENS, client=client)

    assert snapshot.user_name == "Ada Lovelace"
    assert snapshot.user_email == "ada@example.com"
    assert [(ev.title, ev.when) for ev in snapshot.upcoming_events] == [
        ("Standup", "2030-01-01T09:00:00Z"),
        ("No title", "2030-01-02"),
    ]


def test_context_asks_for_five_events(sample_user):
    client = FakeAccountClient(user=sample_user, events=[])
    fetch_context(TOKENS, client=client)
    assert client.event_limits == [5]


def test_calendar_failure_keeps_profile(sample_user):
    snapshot = fetch_context(TOKENS, client=FakeAccountClient(user=sample_user))

    assert snapshot.user_name == "Ada Lovelace"
    assert snapshot.upcoming_events == []
    assert not snapshot.is_empty


def test_profile_failure_keeps_events(sample_events):
    snapshot = fetch_context(TOKENS, client=FakeAccountClient(events=sample_events))

    assert snapshot.user_name is None
    assert snapshot.user_email is None
    assert len(snapshot.upcoming_events) == 2
    assert "User:" not in snapshot.render()


def test_everything_fails_gives_empty_snapshot():
    snapshot = fetch_context(TOKENS, client=FakeAccountClient())
    assert snapshot.is_empty
    assert snapshot.render() == ""


def test_unexpected_read_error_keeps_other_part(sample_user):
    """A transport error that is not a ProviderError still only empties its own part."""

    class BrokenCalendar(FakeAccountClient):
        def get_upcoming_events(self, max_results=10, calendar_id="primary"):
            raise http.client.IncompleteRead(b"")

    snapshot = fetch_context(TOKENS, client=BrokenCalendar(user=sample_user))

    assert snapshot.user_email == "ada@example.com"
    assert snapshot.upcoming_events == []
