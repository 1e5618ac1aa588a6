"""Google OAuth2 client configuration, code exchange and request-scoped credentials."""

from typing import Any, Callable, Dict, Iterable, Optional, TypeVar
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit
import logging
import os

import google_auth_httplib2
import httplib2
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build

from app.config import settings
from app.core.errors import AuthExchangeError, ConfigurationError
from app.models.google import TokenPair

logger = logging.getLogger(__name__)

# Google adds "openid" to the granted scopes when userinfo scopes are requested.
os.environ.setdefault("OAUTHLIB_RELAX_TOKEN_SCOPE", "1")

T = TypeVar("T")


class GoogleOAuthSession:
    """Holds the OAuth2 client config and builds per-request credentials.

    Nothing here stores user tokens. Every authenticated call gets a new
    Credentials object built from the caller's own TokenPair, so concurrent
    requests never see each other's credentials.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        redirect_uri: Optional[str] = None,
    ):
        self.client_id = client_id or settings.google_client_id
        self.client_secret = client_secret or settings.google_client_secret
        self.redirect_uri = redirect_uri or settings.google_redirect_uri

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def _client_config(self) -> Dict[str, Any]:
        if not self.is_configured:
            raise ConfigurationError(
                "Google OAuth client is not configured",
                details="Set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET",
            )
        return {
            "web": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": settings.google_auth_uri,
                "token_uri": settings.google_token_uri,
                "redirect_uris": [self.redirect_uri],
            }
        }

    def _flow(self, scopes: Iterable[str]) -> Flow:
        # No PKCE verifier: the URL and the exchange happen in different requests.
        return Flow.from_client_config(
            self._client_config(),
            scopes=list(scopes),
            redirect_uri=self.redirect_uri,
            autogenerate_code_verifier=False,
        )

    def build_authorization_url(self, scopes: Optional[Iterable[str]] = None) -> str:
        """Get the Google consent URL, forcing consent so a refresh token is issued."""
        flow = self._flow(sorted(scopes or settings.google_scopes))
        auth_url, _ = flow.authorization_url(
            access_type="offline",
            prompt="consent",
        )
        # The callback keeps no server-side state, so the random state value
        # would never be checked. Dropping it keeps the URL deterministic.
        parts = urlsplit(auth_url)
        query = [(k, v) for k, v in parse_qsl(parts.query) if k != "state"]
        return urlunsplit(parts._replace(query=urlencode(query)))

    def exchange_code(self, code: str) -> TokenPair:
        """Exchange an authorization code for a token pair. Nothing is persisted."""
        flow = self._flow(sorted(settings.google_scopes))
        try:
            flow.fetch_token(code=code, timeout=settings.provider_timeout_seconds)
        except Exception as e:
            logger.error(f"OAuth code exchange failed: {e}")
            raise AuthExchangeError("token_exchange_failed", details=str(e)) from e

        creds = flow.credentials
        logger.info(
            f"OAuth tokens received: access_token={'***EXISTS***' if creds.token else 'MISSING'} "
            f"refresh_token={'***EXISTS***' if creds.refresh_token else 'MISSING'} "
            f"expiry={creds.expiry}"
        )
        if not creds.token:
            raise AuthExchangeError("token_exchange_failed", details="No access token")

        return TokenPair(
            access_token=creds.token,
            refresh_token=creds.refresh_token,
            expiry=creds.expiry,
        )

    def credentials_for(self, tokens: TokenPair) -> Credentials:
        """Build a fresh Credentials object for one token pair."""
        # expiry is left unset; an expired token comes back as a 401.
        return Credentials(
            token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            token_uri=settings.google_token_uri,
            client_id=self.client_id,
            client_secret=self.client_secret,
        )

    def with_credentials(self, tokens: TokenPair, fn: Callable[[Credentials], T]) -> T:
        """Run fn once with credentials scoped to this token pair."""
        return fn(self.credentials_for(tokens))

    def build_service(self, tokens: TokenPair, api: str, version: str):
        """Build a googleapiclient resource on its own authorized, timeout-bounded transport."""

        def _build(creds: Credentials):
            http = google_auth_httplib2.AuthorizedHttp(
                creds, http=httplib2.Http(timeout=settings.provider_timeout_seconds)
            )
            return build(api, version, http=http, cache_discovery=False)

        return self.with_credentials(tokens, _build)


oauth_session = GoogleOAuthSession()
