"""ASGI entry point: uvicorn talklink.main:app.

create_app() reads settings, toggles the rate limiter, installs the
error handlers and the CORS/request-id middleware, and mounts /api/v1.
The shared Talk HTTP client lives in talklink.core.lifespan.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from talklink.api.v1 import api_router
from talklink.core.config import get_settings
from talklink.core.exception_handlers import register_exception_handlers
from talklink.core.lifespan import create_lifespan
from talklink.core.limiter import limiter
from talklink.middleware import RequestIDMiddleware
from talklink.pages import render_root_page


def create_app() -> FastAPI:
    """Build the app from current settings (set env and clear get_settings first in tests)."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Last added = outermost: request ID wraps CORS so every response carries it.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/", response_class=HTMLResponse)
    def root() -> HTMLResponse:
        """Landing page with links to the API."""
        return HTMLResponse(content=render_root_page(settings.app_name))

    return app


app = create_app()
