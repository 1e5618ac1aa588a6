"""Pydantic models for the Google OAuth2 flow and account data."""

from datetime import datetime
from pydantic import BaseModel
from typing import List, Optional, Dict, Any


class TokenPair(BaseModel):
    """OAuth2 tokens returned by the code exchange and held by the client."""

    access_token: str
    refresh_token: Optional[str] = None
    expiry: Optional[datetime] = None


class EventSummary(BaseModel):
    """Display-ready projection of a calendar event"""

    title: str
    when: str

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "EventSummary":
        start = event.get("start") or {}
        return cls(
            title=event.get("summary") or "No title",
            when=start.get("dateTime") or start.get("date") or "",
        )


class ContextSnapshot(BaseModel):
    """Per-request summary of the user's Google account used to enrich a prompt."""

    user_name: Optional[str] = None
    user_email: Optional[str] = None
    upcoming_events: List[EventSummary] = []

    @property
    def is_empty(self) -> bool:
        return not (self.user_name or self.user_email or self.upcoming_events)

    def render(self) -> str:
        """Formats the snapshot as the plain-text block embedded in prompts."""
        if self.is_empty:
            return ""

        lines = []
        if self.user_name or self.user_email:
            lines.append(
                f"User: {self.user_name or 'Unknown'} ({self.user_email or 'no email'})"
            )
        lines.append("Upcoming Calendar Events:")
        if self.upcoming_events:
            lines.extend(f"- {ev.title} ({ev.when})" for ev in self.upcoming_events)
        else:
            lines.append("No upcoming events")
        return "\n".join(lines) + "\n"


class AuthUrlResponse(BaseModel):
    """Response for getting the OAuth authorization URL"""

    url: str


class TokensResponse(BaseModel):
    """Tokens returned by the callback when JSON output is requested"""

    tokens: TokenPair


class UserInfoResponse(BaseModel):
    user: Dict[str, Any]


class CalendarEventsResponse(BaseModel):
    events: List[Dict[str, Any]]


class GmailMessagesResponse(BaseModel):
    messages: List[Dict[str, Any]]
