"""Best-effort Google account snapshot used to enrich prompts."""

from typing import Optional
import logging

from app.config import settings
from app.core.google_client import GoogleAccountClient
from app.models.google import ContextSnapshot, EventSummary, TokenPair

logger = logging.getLogger(__name__)


def fetch_context(
    tokens: TokenPair, client: Optional[GoogleAccountClient] = None
) -> ContextSnapshot:
    """
    Reads the user's profile and next calendar events independently.
    A failed read leaves its part of the snapshot empty; the other part is
    still returned. No read failure propagates.
    """
    client = client or GoogleAccountClient(tokens)
    snapshot = ContextSnapshot()

    try:
        user = client.get_user_info()
        snapshot.user_name = user.get("name")
        snapshot.user_email = user.get("email")
    except Exception as e:
        logger.warning(f"Failed to fetch Google profile for context: {e}")

    try:
        events = client.get_upcoming_events(max_results=settings.context_event_limit)
        snapshot.upcoming_events = [EventSummary.from_event(ev) for ev in events]
    except Exception as e:
        logger.warning(f"Failed to fetch calendar events for context: {e}")

    return snapshot
