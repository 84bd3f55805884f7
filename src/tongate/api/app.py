"""FastAPI application factory."""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tongate import __version__
from tongate.api.cors import CORS_ALLOWED_HEADERS, CORS_ALLOWED_METHODS, OriginGuard
from tongate.context import GatewayContext


def create_app(context: Optional[GatewayContext] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        context: Gateway context built at startup; None only for apps that
            never serve ledger routes (e.g. health checks)
    """
    from tongate.config import get_settings

    settings = context.settings if context is not None else get_settings()

    app = FastAPI(
        title="tongate",
        description="HTTP gateway to the WalletMap TON contract",
        version=__version__,
        debug=settings.debug,
    )
    app.state.context = context

    # Bodies that are not a JSON object get the same error shape as the routes
    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        details = "; ".join(err.get("msg", "") for err in exc.errors())
        return JSONResponse(
            status_code=400, content={"error": "Invalid request", "details": details}
        )

    origins = settings.allowed_origin_list

    # CORS headers for allowed origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=CORS_ALLOWED_HEADERS,
    )
    # Added last so it runs first: rejects unknown origins before CORS handling
    app.add_middleware(OriginGuard, allowed_origins=origins)

    # Register routes
    from tongate.api.routes import airdrop, balance, health, withdraw

    app.include_router(health.router, tags=["Health"])
    app.include_router(balance.router, tags=["Balance"])
    app.include_router(airdrop.router, tags=["Airdrop"])
    app.include_router(withdraw.router, tags=["Withdraw"])

    return app
