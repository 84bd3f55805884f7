"""Cross-origin policy.

Browser requests must come from the allow-list. Requests without an Origin
header (mobile apps, curl, server-to-server, the keep-alive prober) are
always let through.
"""

import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOWED_HEADERS = [
    "Content-Type",
    "Authorization",
    "X-Requested-With",
    "Accept",
    "Origin",
    "ngrok-skip-browser-warning",
]


def is_origin_allowed(origin: Optional[str], allowed_origins: list[str]) -> bool:
    """Check an Origin header value against the allow-list."""
    if not origin:
        return True
    return origin.rstrip("/") in allowed_origins


class OriginGuard(BaseHTTPMiddleware):
    """Rejects requests whose Origin is not in the allow-list."""

    def __init__(self, app, allowed_origins: list[str]):
        super().__init__(app)
        self.allowed_origins = allowed_origins

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if not is_origin_allowed(origin, self.allowed_origins):
            logger.warning(f"Blocked by CORS: {origin}")
            return JSONResponse(status_code=403, content={"error": "Not allowed by CORS"})
        return await call_next(request)
