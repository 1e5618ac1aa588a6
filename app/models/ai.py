"""Pydantic models for the AI prompt endpoints."""

from pydantic import BaseModel, Field
from typing import Literal, Optional

from app.models.google import TokenPair


class AIRequest(BaseModel):
    """Request body for /api/ai"""

    prompt: Optional[str] = None


class AIAgentRequest(AIRequest):
    """Request body for /api/ai-agent, optionally carrying Google tokens."""

    access_token: Optional[str] = Field(default=None, alias="accessToken")
    refresh_token: Optional[str] = Field(default=None, alias="refreshToken")

    class Config:
        """Pydantic model configuration."""

        populate_by_name = True

    @property
    def tokens(self) -> Optional[TokenPair]:
        if not self.access_token:
            return None
        return TokenPair(
            access_token=self.access_token, refresh_token=self.refresh_token
        )


class PromptRequest(BaseModel):
    """A prompt to answer, with the caller's Google tokens if it has any."""

    prompt: str
    tokens: Optional[TokenPair] = None


class AIResponse(BaseModel):
    """Response shape shared by both AI endpoints."""

    result: str
    response: str
    timestamp: str
    status: Literal["success", "fallback"]
