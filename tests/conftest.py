"""Shared fakes for the completion provider and Google account reads."""

import pytest

from app.core.errors import ProviderError


class FakeLLM:
    """Stands in for GeminiClient and records what it was asked."""

    def __init__(self, reply="model reply", error=None, configured=True):
        self.reply = reply
        self.error = error
        self.is_configured = configured
        self.calls = []

    async def complete(self, prompt, system_instruction=None):
        self.calls.append((prompt, system_instruction))
        if self.error:
            raise self.error
        return self.reply


class FakeAccountClient:
    """Stands in for GoogleAccountClient; None for a part means that read fails."""

    def __init__(self, user=None, events=None, messages=None):
        self.user = user
        self.events = events
        self.messages = messages
        self.event_limits = []

    def get_user_info(self):
        if self.user is None:
            raise ProviderError("Google UserInfo error", details={"status": 401})
        return self.user

    def get_upcoming_events(self, max_results=10, calendar_id="primary"):
        self.event_limits.append(max_results)
        if self.events is None:
            raise ProviderError("Google Calendar error", details={"status": 403})
        return self.events[:max_results]

    def get_unread_messages(self, max_results=10):
        if self.messages is None:
            raise ProviderError("Google Gmail error", details={"status": 401})
        return self.messages[:max_results]


@pytest.fixture
def sample_user():
    return {"id": "1", "name": "Ada Lovelace", "email": "ada@example.com"}


@pytest.fixture
def sample_events():
    return [
        {
            "id": "e1",
            "summary": "Standup",
            "start": {"dateTime": "2030-01-01T09:00:00Z"},
        },
        {"id": "e2", "start": {"date": "2030-01-02"}},
    ]
