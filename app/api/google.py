"""API endpoints for the Google OAuth2 flow and account data."""

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Query
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.core.errors import AuthExchangeError, ConfigurationError, ValidationError
from app.core.google_client import GoogleAccountClient
from app.core.oauth_session import oauth_session
from app.models.google import (
    AuthUrlResponse,
    CalendarEventsResponse,
    GmailMessagesResponse,
    TokenPair,
    TokensResponse,
    UserInfoResponse,
)

router = APIRouter(prefix="/api/google", tags=["google"])
logger = logging.getLogger(__name__)


def _frontend_redirect(**params) -> RedirectResponse:
    base = settings.frontend_redirect_url
    separator = "&" if "?" in base else "?"
    return RedirectResponse(f"{base}{separator}{urlencode(params)}")


def _tokens_from_query(access_token: Optional[str], refresh_token: Optional[str]) -> TokenPair:
    if not access_token:
        raise ValidationError("Missing access_token")
    return TokenPair(access_token=access_token, refresh_token=refresh_token or None)


@router.get("/auth", response_model=AuthUrlResponse)
async def get_auth_url():
    """Step 1: Get the Google consent URL the browser should visit."""
    return AuthUrlResponse(url=oauth_session.build_authorization_url())


@router.get("/callback")
async def handle_auth_callback(
    code: Optional[str] = None,
    error: Optional[str] = None,
    format: Optional[str] = None,
):
    """
    Step 2: Google redirects here with an authorization code (or an error).
    The browser is sent back to the frontend with the access token in the
    query string. With format=json the tokens are returned as JSON instead,
    for frontends that receive the code themselves.
    """
    as_json = format == "json"

    if error:
        logger.error(f"OAuth error: {error}")
        if as_json:
            raise AuthExchangeError(error)
        return _frontend_redirect(error=error)

    if not code:
        logger.error("No authorization code received")
        if as_json:
            raise AuthExchangeError("no_code")
        return _frontend_redirect(error="no_code")

    try:
        tokens = await run_in_threadpool(oauth_session.exchange_code, code)
    except AuthExchangeError:
        if as_json:
            raise
        return _frontend_redirect(error="token_exchange_failed")
    except ConfigurationError:
        logger.error("OAuth callback hit without a configured Google client")
        if as_json:
            raise
        return _frontend_redirect(error="oauth_not_configured")

    if as_json:
        return TokensResponse(tokens=tokens)
    return _frontend_redirect(success="true", access_token=tokens.access_token)


@router.get("/userinfo", response_model=UserInfoResponse)
async def get_user_info(
    access_token: Optional[str] = Query(None),
    refresh_token: Optional[str] = Query(None),
):
    """Get the connected user's Google profile"""
    client = GoogleAccountClient(_tokens_from_query(access_token, refresh_token))
    user = await run_in_threadpool(client.get_user_info)
    return UserInfoResponse(user=user)


@router.get("/calendar", response_model=CalendarEventsResponse)
async def get_calendar_events(
    access_token: Optional[str] = Query(None),
    refresh_token: Optional[str] = Query(None),
):
    """Get upcoming events from the primary calendar"""
    client = GoogleAccountClient(_tokens_from_query(access_token, refresh_token))
    events = await run_in_threadpool(
        client.get_upcoming_events, settings.calendar_event_limit
    )
    return CalendarEventsResponse(events=events)


@router.get("/gmail", response_model=GmailMessagesResponse)
async def get_gmail_messages(
    access_token: Optional[str] = Query(None),
    refresh_token: Optional[str] = Query(None),
):
    """Get unread Gmail messages"""
    client = GoogleAccountClient(_tokens_from_query(access_token, refresh_token))
    messages = await run_in_threadpool(
        client.get_unread_messages, settings.gmail_message_limit
    )
    return GmailMessagesResponse(messages=messages)
