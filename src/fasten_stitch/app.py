from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.staticfiles import StaticFiles

from fasten_stitch import __version__
from fasten_stitch.config import StitchConfig, load_stitch_config
from fasten_stitch.events import utc_now_iso
from fasten_stitch.models import (
    CONNECT_PATH,
    HEALTH_PATH,
    ROOT_PATH,
    HealthStatus,
    InternalError,
    NotFound,
    ServiceIndex,
    key_status,
)
from fasten_stitch.pages.router import router as pages_router
from fasten_stitch.security import install_security

logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).resolve().parent / "public"


def _request_path(request: Request) -> str:
    """The path as the client sent it, still percent-encoded."""

    raw = request.scope.get("raw_path")
    if raw:
        return raw.split(b"?", 1)[0].decode("latin-1")
    return request.url.path


def create_app(config: StitchConfig | None = None) -> FastAPI:
    config = config or load_stitch_config()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        logger.info("Fasten Stitch Page Service running on port %d", config.port)
        logger.info("iOS Connect URL: %s", CONNECT_PATH)
        logger.info("Public Key: %s", config.public_key)
        logger.info("Health check: %s", HEALTH_PATH)
        logger.info("Started at: %s", utc_now_iso())
        try:
            yield
        finally:
            logger.info("Fasten Stitch Page Service shutting down")

    app = FastAPI(
        title="Fasten Stitch Page",
        version=__version__,
        lifespan=_lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.stitch_config = config

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception:
            # Full detail stays in the log; the client gets the generic body.
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            response = JSONResponse(
                status_code=500,
                content=InternalError().model_dump(mode="json"),
            )
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    install_security(app)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Routes are registered per method; a wrong method is just an unmatched route.
        if exc.status_code in (404, 405):
            return JSONResponse(
                status_code=404,
                content=NotFound(path=_request_path(request)).model_dump(
                    mode="json", by_alias=True
                ),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.detail if isinstance(exc.detail, str) else "HTTP error",
                "timestamp": utc_now_iso(),
            },
            headers=getattr(exc, "headers", None),
        )

    app.include_router(pages_router)

    @app.api_route(HEALTH_PATH, methods=["GET", "HEAD"], response_model=HealthStatus)
    async def health() -> HealthStatus:
        return HealthStatus(public_key=key_status(config.public_key_configured))

    @app.api_route(ROOT_PATH, methods=["GET", "HEAD"], response_model=ServiceIndex)
    async def root() -> ServiceIndex:
        return ServiceIndex(public_key=key_status(config.public_key_configured))

    # Mounted last: it claims every path the routes above did not.
    if PUBLIC_DIR.is_dir():
        app.mount("/", StaticFiles(directory=str(PUBLIC_DIR)), name="public")
    else:
        logger.warning(
            "Public static directory is missing (%s); static files will not be served",
            PUBLIC_DIR,
        )

    return app
