import logging
import os
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rsvp.core.config import EVENTS_COLLECTION, LOG_LEVEL, MAX_APPEND_ATTEMPTS, TEMPLATES_DIR
from rsvp.core.exceptions import MethodNotAllowedError, RSVPError
from rsvp.deps import build_store
from rsvp.routers import events
from rsvp.services.renderer import TemplateRenderer
from rsvp.services.store import EventStore

# --- LOGGING ---
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s"
)
logger = logging.getLogger(__name__)


def _error_response(request: Request, exc: RSVPError) -> PlainTextResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}", exc_info=exc)
    headers = None
    if isinstance(exc, MethodNotAllowedError) and exc.allowed:
        headers = {"Allow": ", ".join(exc.allowed)}
    return PlainTextResponse(exc.message, status_code=exc.status_code, headers=headers)


def create_app(store: EventStore, renderer: TemplateRenderer,
               collection: str = EVENTS_COLLECTION,
               max_append_attempts: int = MAX_APPEND_ATTEMPTS) -> FastAPI:
    """Builds the application around an explicit store and renderer"""
    # Every top-level path is an event shorthand, so the docs routes stay off
    app = FastAPI(title="RSVP", version="1.0.0", docs_url=None, redoc_url=None, openapi_url=None)

    app.state.store = store
    app.state.renderer = renderer
    app.state.collection = collection
    app.state.max_append_attempts = max_append_attempts

    @app.exception_handler(RSVPError)
    async def handle_rsvp_error(request: Request, exc: RSVPError):
        return _error_response(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        # Methods the router never registered are resolved by the same path rules
        if exc.status_code == 405:
            return _error_response(request, events.method_error(request.scope["path"]))
        return PlainTextResponse(HTTPStatus(exc.status_code).phrase, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}", exc_info=exc)
        return PlainTextResponse(RSVPError.message, status_code=500)

    app.include_router(events.router)
    return app


def get_application() -> FastAPI:
    """uvicorn factory: uvicorn rsvp.main:get_application --factory"""
    return create_app(build_store(), TemplateRenderer(TEMPLATES_DIR))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rsvp.main:get_application",
        factory=True,
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8080")),
        log_level=LOG_LEVEL.lower()
    )
