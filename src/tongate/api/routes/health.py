"""Health check endpoints."""

from fastapi import APIRouter, Request

from tongate import __version__
from tongate.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness probe used by the keep-alive loop and uptime monitors."""
    return {"status": "alive"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with redacted configuration info."""
    context = getattr(request.app.state, "context", None)
    settings = context.settings if context is not None else get_settings()
    return {
        "status": "alive",
        "service": "tongate",
        "version": __version__,
        "ledger": repr(context.ledger) if context is not None else None,
        "admin_configured": context is not None and context.admin is not None,
        "config": settings.get_safe_dict(),
    }
