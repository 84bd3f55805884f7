"""Request dependencies."""

from fastapi import HTTPException, Request

from tongate.context import GatewayContext


def get_context(request: Request) -> GatewayContext:
    """Get the gateway context attached to the application at startup."""
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise HTTPException(status_code=503, detail="Gateway is not initialized")
    return context
