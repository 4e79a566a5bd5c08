"""
Main API module for LinkHub.

Responsibilities:
    - Expose REST endpoints under /api for listing, creating, updating and
      deleting links, toggling favourites and counting clicks
    - Translate service errors into HTTP status codes and `{"message"}` bodies
    - Own the storage lifecycle (connect on startup, close on shutdown)

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - The storage handle is passed in (or built from env by the factory) and
      injected into LinkManager; nothing is module-global except `app`.
    - LinkManager owns normalization/validation; routes only map HTTP to calls.

Run:
    LINKHUB_DB_DSN=postgresql://... uvicorn main:app --port 5000
    LINKHUB_STORAGE_BACKEND=memory python main.py
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkhub.config import settings
from linkhub.errors import LinkError
from linkhub.manager.link_manager import LinkManager
from linkhub.schemas import FavouriteIn, HealthOut, LinkIn, LinkOut, MessageOut
from linkhub.storage.base import BaseStorage
from linkhub.storage.storage_factory import get_storage

log = logging.getLogger("linkhub")


def _validation_messages(exc: RequestValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return messages


def create_app(storage: Optional[BaseStorage] = None) -> FastAPI:
    """
    Build and configure a new FastAPI app instance.

    Args:
        storage (Optional[BaseStorage]): Backend to use. When omitted the
            storage factory builds one from the environment, which raises
            ConfigurationError if the postgres backend has no DSN.

    Returns:
        FastAPI: A configured application with its own LinkManager.
    """
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )

    storage = storage if storage is not None else get_storage()
    manager = LinkManager(storage=storage)
    log.info("LinkHub storage backend: %s", type(storage).__name__)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        try:
            storage.connect()
        except Exception:
            log.exception("Storage connection failed; refusing to start")
            raise
        log.info("Storage connected")
        try:
            yield
        finally:
            storage.close()
            log.info("Storage connection closed")

    app = FastAPI(
        title="LinkHub",
        description="Personal link bookmarking API with favourites and click counts",
        lifespan=lifespan,
    )
    app.state.storage = storage
    app.state.manager = manager

    # ----------------------------------------------------------------
    # Error translation
    # ----------------------------------------------------------------
    @app.exception_handler(LinkError)
    async def link_error_handler(_request: Request, exc: LinkError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"message": "Validation Error", "errors": _validation_messages(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"message": "Route not found"})
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        log.exception("Server error on %s %s", request.method, request.url.path)
        detail = str(exc) if settings.is_development else "Something went wrong"
        return JSONResponse(
            status_code=500,
            content={"message": "Internal server error", "error": detail},
        )

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    router = APIRouter(prefix="/api")

    @router.get("/health", response_model=HealthOut)
    def health() -> HealthOut:
        return HealthOut(
            message="LinkHub API is running!",
            timestamp=datetime.now(timezone.utc).isoformat(),
            database="Connected" if storage.ping() else "Disconnected",
        )

    @router.get("/links", response_model=List[LinkOut])
    def list_links() -> List[LinkOut]:
        """All links, newest first."""
        return [LinkOut.from_link(link) for link in manager.list_links()]

    @router.get("/links/favourites", response_model=List[LinkOut])
    def list_favourites() -> List[LinkOut]:
        return [LinkOut.from_link(link) for link in manager.list_favourites()]

    @router.post("/links", response_model=LinkOut, status_code=201)
    def create_link(body: Optional[LinkIn] = None) -> LinkOut:
        """
        Create a link. `url` is required; scheme-less URLs get "https://".
        A missing body is treated like an empty one (400 "URL is required").
        """
        body = body or LinkIn()
        link = manager.create_link(body.url, body.title, body.tags)
        return LinkOut.from_link(link)

    @router.put("/links/{link_id}", response_model=LinkOut)
    def update_link(link_id: str, body: Optional[LinkIn] = None) -> LinkOut:
        """Full replace: omitted title/tags are reset to empty."""
        body = body or LinkIn()
        link = manager.update_link(link_id, body.url, body.title, body.tags)
        return LinkOut.from_link(link)

    @router.delete("/links/{link_id}", response_model=MessageOut)
    def delete_link(link_id: str) -> MessageOut:
        return MessageOut(message=manager.delete_link(link_id))

    @router.patch("/links/{link_id}/favourite", response_model=LinkOut)
    def set_favourite(link_id: str, body: Optional[FavouriteIn] = None) -> LinkOut:
        value = body.is_favourite if body is not None else None
        return LinkOut.from_link(manager.set_favourite(link_id, value))

    @router.patch("/links/{link_id}/click", response_model=LinkOut)
    def record_click(link_id: str) -> LinkOut:
        return LinkOut.from_link(manager.record_click(link_id))

    app.include_router(router)
    return app


# `uvicorn main:app` and `from main import app` keep working; a postgres
# backend without LINKHUB_DB_DSN fails here, before the server binds.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    log.info("API available at http://%s:%d/api", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
