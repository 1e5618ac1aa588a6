"""Application configuration management using Pydantic's BaseSettings."""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Defines all configuration settings for the API, loaded from .env file."""

    # Completion provider (Gemini). Without a key the agent runs in echo mode.
    google_api_key: Optional[str] = None
    llm_model: str = "gemini-2.0-flash"

    # Google OAuth2 client
    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    google_redirect_uri: str = "http://localhost:5001/api/google/callback"
    google_token_uri: str = "https://oauth2.googleapis.com/token"
    google_auth_uri: str = "https://accounts.google.com/o/oauth2/auth"
    google_scopes: List[str] = [
        "https://www.googleapis.com/auth/calendar.readonly",
        "https://www.googleapis.com/auth/calendar.events",
        "https://www.googleapis.com/auth/userinfo.email",
        "https://www.googleapis.com/auth/userinfo.profile",
        "https://www.googleapis.com/auth/gmail.readonly",
        "https://www.googleapis.com/auth/drive.readonly",
    ]

    # Where the OAuth callback sends the browser afterwards
    frontend_redirect_url: str = "http://localhost:8501/"

    # CORS allow-list
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:8501",
    ]

    # Outbound call limits
    provider_timeout_seconds: float = 20.0
    context_event_limit: int = 5
    calendar_event_limit: int = 10
    gmail_message_limit: int = 10

    # App settings
    host: str = "0.0.0.0"
    port: int = 5001
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        """Pydantic model configuration."""

        env_file = ".env"


settings = Settings()
