"""FastAPI middleware that tags each request with an ID and logs its outcome."""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import logging
import time
import uuid

logger = logging.getLogger(__name__)


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Middleware to handle request IDs and access logging"""

    def __init__(self, app, header_name: str = "X-Request-ID"):
        """Initializes the middleware."""
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next):
        """Attaches a request ID, times the request and echoes the ID back."""
        # Reuse the caller's ID when it sends one
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        # Query strings can carry tokens, so only the path is logged
        logger.info(
            f"[{request_id}] {request.method} {request.url.path} "
            f"-> {response.status_code} ({elapsed_ms:.0f} ms)"
        )
        response.headers[self.header_name] = request_id
        return response
