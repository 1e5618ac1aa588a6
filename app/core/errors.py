"""Exception types raised by the agent core and mapped to HTTP responses in app.main."""

from typing import Any, Optional


class AgentError(Exception):
    """Base class for all errors raised by the agent backend."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(AgentError):
    """A request is missing a required field (prompt, access token)."""

    status_code = 400


class ProviderError(AgentError):
    """A call to the completion provider or a Google API failed."""

    status_code = 500


class AuthExchangeError(AgentError):
    """Google rejected an authorization code."""

    status_code = 400


class ConfigurationError(AgentError):
    """The OAuth2 client is not configured."""

    status_code = 500
