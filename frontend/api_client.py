"""Thin wrappers around the AI Agent backend endpoints."""

import os
from typing import Any, Dict, List, Optional

import requests

API_BASE = os.environ.get("AI_AGENT_API_BASE", "http://localhost:5001")
TIMEOUT = 60


def _session() -> requests.Session:
    session = requests.Session()
    session.headers["Accept"] = "application/json"
    return session


def _token_params(access_token: str, refresh_token: Optional[str]) -> Dict[str, str]:
    params = {"access_token": access_token}
    if refresh_token:
        params["refresh_token"] = refresh_token
    return params


def get_status() -> Dict[str, Any]:
    response = _session().get(f"{API_BASE}/api/status", timeout=3)
    response.raise_for_status()
    return response.json()


def get_ai_response(prompt: str) -> Dict[str, Any]:
    """Asks the plain AI endpoint; returns the full {result, status, ...} body."""
    response = _session().post(f"{API_BASE}/api/ai", json={"prompt": prompt}, timeout=TIMEOUT)
    response.raise_for_status()
    return response.json()


def get_ai_agent_response(
    prompt: str, access_token: Optional[str] = None, refresh_token: Optional[str] = None
) -> Dict[str, Any]:
    """Asks the Google-aware AI endpoint."""
    payload = {"prompt": prompt, "accessToken": access_token, "refreshToken": refresh_token}
    response = _session().post(f"{API_BASE}/api/ai-agent", json=payload, timeout=TIMEOUT)
    response.raise_for_status()
    return response.json()


def get_google_auth_url() -> str:
    response = _session().get(f"{API_BASE}/api/google/auth", timeout=TIMEOUT)
    response.raise_for_status()
    return response.json()["url"]


def get_google_tokens(code: str) -> Dict[str, Any]:
    """Exchanges an authorization code the frontend received itself."""
    response = _session().get(
        f"{API_BASE}/api/google/callback",
        params={"code": code, "format": "json"},
        timeout=TIMEOUT,
    )
    response.raise_for_status()
    return response.json()["tokens"]


def get_google_user_info(access_token: str, refresh_token: Optional[str] = None) -> Dict[str, Any]:
    response = _session().get(
        f"{API_BASE}/api/google/userinfo",
        params=_token_params(access_token, refresh_token),
        timeout=TIMEOUT,
    )
    response.raise_for_status()
    return response.json()["user"]


def get_google_calendar_events(
    access_token: str, refresh_token: Optional[str] = None
) -> List[Dict[str, Any]]:
    response = _session().get(
        f"{API_BASE}/api/google/calendar",
        params=_token_params(access_token, refresh_token),
        timeout=TIMEOUT,
    )
    response.raise_for_status()
    return response.json()["events"]


def get_google_gmail_messages(
    access_token: str, refresh_token: Optional[str] = None
) -> List[Dict[str, Any]]:
    response = _session().get(
        f"{API_BASE}/api/google/gmail",
        params=_token_params(access_token, refresh_token),
        timeout=TIMEOUT,
    )
    response.raise_for_status()
    return response.json()["messages"]
