from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from api.core.config import Settings, get_settings
from api.core.logging_config import setup_logging
from api.repositories.json_storage import JsonDocumentStore
from api.routers import notifications as notifications_router
from api.routers import storage as storage_router
from api.services.settings_service import SettingsService
from api.services.user_service import UserService

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared Content-Length exceeds the configured limit."""

    def __init__(self, app, *, max_body_bytes: int) -> None:
        super().__init__(app)
        self._max_body_bytes = max_body_bytes

    async def dispatch(self, request, call_next):
        declared = request.headers.get("content-length")
        if declared and self._max_body_bytes > 0:
            try:
                too_large = int(declared) > self._max_body_bytes
            except ValueError:
                return JSONResponse({"success": False, "message": "Invalid Content-Length"}, status_code=400)
            if too_large:
                return JSONResponse({"success": False, "message": "Request body too large"}, status_code=413)
        return await call_next(request)


class SPAStaticFiles(StaticFiles):
    """Serve the frontend build; unknown paths fall back to index.html for client-side routing."""

    async def get_response(self, path, scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response("index.html", scope)


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse({"success": False, "message": "Invalid request body"}, status_code=422)


def create_app(settings: Settings | None = None, store: JsonDocumentStore | None = None) -> FastAPI:
    """Build the API; the document store is created once and shared through app.state."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    store = store or JsonDocumentStore(settings.storage_dir)
    store.ensure_layout()
    logger.info("Storage ready at %s", store.root)

    app = FastAPI(title="Storage API")
    app.state.settings = settings
    app.state.store = store
    app.state.user_service = UserService(store)
    app.state.settings_service = SettingsService(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)
    app.add_exception_handler(RequestValidationError, _validation_error)

    app.include_router(storage_router.router)
    app.include_router(notifications_router.router)

    if settings.dist_dir.is_dir():
        app.mount("/", SPAStaticFiles(directory=str(settings.dist_dir), html=True), name="spa")
    else:
        logger.info("No frontend build at %s; static serving disabled", settings.dist_dir)
    return app
