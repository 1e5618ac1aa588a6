"""Client for interacting with the Google Gemini LLM."""

import asyncio
import google.generativeai as genai
from app.config import settings
from typing import Optional
import logging

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a helpful AI assistant with access to the user's Google services.
{context}You can help with calendar management, email insights, and personal productivity. Always be helpful and accurate."""


def build_system_instruction(context: str) -> str:
    """Embeds the rendered Google context into the assistant's system instruction."""
    return SYSTEM_PROMPT.format(
        context=f"Here's the user's current context:\n{context}" if context else ""
    )


class GeminiClient:
    """A client to handle interactions with the Google Gemini API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Configures the Gemini API key; models are created per request."""
        self.api_key = api_key or settings.google_api_key
        self.model_name = model_name or settings.llm_model
        self.timeout = timeout or settings.provider_timeout_seconds
        if self.api_key:
            genai.configure(api_key=self.api_key)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def complete(
        self, prompt: str, system_instruction: Optional[str] = None
    ) -> str:
        """Sends one prompt, with an optional system instruction, and returns the reply text."""
        model = genai.GenerativeModel(
            self.model_name, system_instruction=system_instruction
        )
        response = await asyncio.wait_for(
            model.generate_content_async(
                prompt, request_options={"timeout": self.timeout}
            ),
            timeout=self.timeout,
        )
        text = (response.text or "").strip()
        return text or "No response"
