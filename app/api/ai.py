"""AI prompt endpoints, with and without Google context."""

import logging
from fastapi import APIRouter

from app.core.errors import ValidationError
from app.core.orchestrator import PromptOrchestrator, to_response
from app.models.ai import AIAgentRequest, AIRequest, AIResponse, PromptRequest

# --- Setup ---
router = APIRouter(prefix="/api", tags=["ai"])
basic_orchestrator = PromptOrchestrator(echo_prefix="AI Echo")
agent_orchestrator = PromptOrchestrator(
    echo_prefix="AI Agent Echo", use_google_context=True
)
logger = logging.getLogger(__name__)


def _require_prompt(prompt):
    if not prompt or not prompt.strip():
        raise ValidationError("Prompt is required")
    return prompt


@router.post("/ai", response_model=AIResponse)
async def ai(ai_request: AIRequest):
    """Answers a prompt without any Google context."""
    prompt = _require_prompt(ai_request.prompt)
    logger.info(f"AI request ({len(prompt)} chars)")

    result = await basic_orchestrator.answer(PromptRequest(prompt=prompt))
    return to_response(result)


@router.post("/ai-agent", response_model=AIResponse)
async def ai_agent(agent_request: AIAgentRequest):
    """Answers a prompt, enriched with the user's Google data when tokens are given."""
    prompt = _require_prompt(agent_request.prompt)
    tokens = agent_request.tokens
    logger.info(
        f"AI agent request ({len(prompt)} chars, google tokens: {'yes' if tokens else 'no'})"
    )

    result = await agent_orchestrator.answer(
        PromptRequest(prompt=prompt, tokens=tokens)
    )
    if result.status == "fallback":
        logger.warning(f"AI agent answered with fallback: {result.cause}")
    return to_response(result)
