"""Answers prompts, optionally enriched with Google context, degrading to an echo on failure."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional, Union
import logging

from starlette.concurrency import run_in_threadpool

from app.core.context_fetcher import fetch_context
from app.core.errors import ValidationError
from app.core.llm_client import GeminiClient, build_system_instruction
from app.models.ai import AIResponse, PromptRequest
from app.models.google import ContextSnapshot, TokenPair

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


@dataclass
class Completed:
    """The completion provider answered (or echo mode is active)."""

    text: str
    timestamp: str = field(default_factory=utc_timestamp)
    status = "success"


@dataclass
class Fallback:
    """The completion provider failed and the prompt was echoed back."""

    text: str
    cause: BaseException
    timestamp: str = field(default_factory=utc_timestamp)
    status = "fallback"


PromptResult = Union[Completed, Fallback]


def to_response(result: PromptResult) -> AIResponse:
    return AIResponse(
        result=result.text,
        response=result.text,
        timestamp=result.timestamp,
        status=result.status,
    )


class PromptOrchestrator:
    """
    Linear decision list behind the AI endpoints:

    1. reject blank prompts
    2. fetch Google context when tokens are given (best-effort)
    3. echo when no completion credential is configured
    4. otherwise ask the LLM, echoing the prompt back if that call fails
    """

    def __init__(
        self,
        echo_prefix: str = "AI Echo",
        use_google_context: bool = False,
        llm_client: Optional[GeminiClient] = None,
        context_fetcher: Callable[[TokenPair], ContextSnapshot] = fetch_context,
    ):
        self.echo_prefix = echo_prefix
        self.use_google_context = use_google_context
        self.llm_client = llm_client or GeminiClient()
        self.context_fetcher = context_fetcher

    def _echo(self, prompt: str) -> str:
        return f"{self.echo_prefix}: {prompt}"

    async def _load_context(self, tokens: Optional[TokenPair]) -> ContextSnapshot:
        if not self.use_google_context or not tokens or not tokens.access_token:
            return ContextSnapshot()
        try:
            return await run_in_threadpool(self.context_fetcher, tokens)
        except Exception as e:
            logger.error(f"Failed to fetch Google data: {e}", exc_info=True)
            return ContextSnapshot()

    async def answer(self, request: PromptRequest) -> PromptResult:
        """Produces an answer for the prompt; only a blank prompt raises."""
        prompt = request.prompt
        if not prompt or not prompt.strip():
            raise ValidationError("Prompt is required")

        snapshot = await self._load_context(request.tokens)
        context = snapshot.render()

        if not self.llm_client.is_configured:
            text = self._echo(prompt)
            if context:
                text += f"\n\nWith Google Context:\n{context}"
            return Completed(text=text)

        system_instruction = build_system_instruction(context) if context else None
        try:
            text = await self.llm_client.complete(prompt, system_instruction)
        except Exception as e:
            logger.error(f"AI provider error, falling back to echo: {e}", exc_info=True)
            return Fallback(text=self._echo(prompt), cause=e)

        return Completed(text=text)
