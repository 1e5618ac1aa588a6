"""Main FastAPI application entry point."""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from contextlib import asynccontextmanager
from app.config import settings
from app.core.errors import AgentError
from app.core.orchestrator import utc_timestamp
from app.middleware.request_log import RequestLogMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware
import logging
import uvicorn

# Import routers individually to avoid circular imports
from app.api.ai import router as ai_router
from app.api.google import router as google_router

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manages application startup and shutdown events."""
    logger.info("Starting AI Agent API")
    if not settings.google_api_key:
        logger.info("No completion provider key configured, answering in echo mode")
    if not (settings.google_client_id and settings.google_client_secret):
        logger.warning("Google OAuth client not configured, Google endpoints will fail")

    yield

    logger.info("Shutting down AI Agent API")


app = FastAPI(
    title="AI Agent API",
    description="AI prompts enriched with the user's Google account context",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLogMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ai_router)
app.include_router(google_router)


@app.exception_handler(AgentError)
async def agent_error_handler(request: Request, exc: AgentError):
    """Maps agent errors to an {error, details} body with the error's status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")

    content = {"error": exc.message}
    if exc.details is not None:
        content["details"] = jsonable_encoder(exc.details)
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors, reported as 400."""
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Last resort for anything the routes did not handle."""
    logger.error(f"Unhandled error: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness check."""
    return "AI Agent Backend is running"


@app.get("/api/status")
async def status():
    """Reports that the API is up, with the server time."""
    return {"status": "ok", "time": utc_timestamp()}


def run():
    """Starts the API with uvicorn."""
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
