"""Read-only Google account access (profile, calendar, Gmail) for one token pair."""

from datetime import datetime, timezone
from typing import List, Dict, Any, Optional
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError
import httplib2
import logging

from app.core.errors import ProviderError
from app.core.oauth_session import GoogleOAuthSession, oauth_session
from app.models.google import TokenPair

logger = logging.getLogger(__name__)

GOOGLE_ERRORS = (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError)


def _event_start(event: Dict[str, Any]) -> Optional[datetime]:
    """Parse an event's start, preferring dateTime over the all-day date."""
    start = event.get("start") or {}
    raw = start.get("dateTime") or start.get("date")
    if not raw:
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _error_details(error: Exception) -> Dict[str, Any]:
    details: Dict[str, Any] = {"type": type(error).__name__, "message": str(error)}
    if isinstance(error, HttpError):
        details["status"] = error.resp.status
        details["reason"] = getattr(error, "reason", None)
    return details


class GoogleAccountClient:
    """Google API client bound to a single request's token pair"""

    def __init__(self, tokens: TokenPair, session: Optional[GoogleOAuthSession] = None):
        self.tokens = tokens
        self.session = session or oauth_session

    def _service(self, api: str, version: str):
        return self.session.build_service(self.tokens, api, version)

    def get_user_info(self) -> Dict[str, Any]:
        """Get the user's Google profile"""
        try:
            service = self._service("oauth2", "v2")
            return service.userinfo().get().execute()
        except GOOGLE_ERRORS as e:
            logger.error(f"User info error: {e}")
            raise ProviderError("Google UserInfo error", details=_error_details(e)) from e

    def get_upcoming_events(
        self, max_results: int = 10, calendar_id: str = "primary"
    ) -> List[Dict[str, Any]]:
        """Get events starting now or later, ordered by start time"""
        now = datetime.now(timezone.utc)
        upcoming = []
        page_token = None
        try:
            service = self._service("calendar", "v3")
            # timeMin bounds the end time, so events already in progress come
            # back too. Keep paging until enough of them start at or after now.
            while len(upcoming) < max_results:
                params = dict(
                    calendarId=calendar_id,
                    timeMin=now.isoformat().replace("+00:00", "Z"),
                    maxResults=max_results,
                    singleEvents=True,
                    orderBy="startTime",
                )
                if page_token:
                    params["pageToken"] = page_token
                result = service.events().list(**params).execute()

                for event in result.get("items", []):
                    start = _event_start(event)
                    if start is not None and start >= now:
                        upcoming.append((start, event))

                page_token = result.get("nextPageToken")
                if not page_token:
                    break
        except GOOGLE_ERRORS as e:
            logger.error(f"Events fetch error: {e}")
            raise ProviderError("Google Calendar error", details=_error_details(e)) from e

        upcoming.sort(key=lambda pair: pair[0])
        return [event for _, event in upcoming[:max_results]]

    def get_unread_messages(self, max_results: int = 10) -> List[Dict[str, Any]]:
        """Get unread Gmail message references"""
        try:
            service = self._service("gmail", "v1")
            result = (
                service.users()
                .messages()
                .list(userId="me", maxResults=max_results, q="is:unread")
                .execute()
            )
        except GOOGLE_ERRORS as e:
            logger.error(f"Gmail fetch error: {e}")
            raise ProviderError("Google Gmail error", details=_error_details(e)) from e
        return result.get("messages", [])[:max_results]
