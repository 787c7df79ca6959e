"""
CargoSnap Proxy — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn cargosnap_proxy.main:app) or `python -m cargosnap_proxy`.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  Req ID → Access Log → CORS → Unexpected Error      │
    │                                                     │
    │  Routes ({API_PREFIX}):                             │
    │  files · uploads · fields · reports · share · forms │
    │  GET /status (root)                                 │
    │                                                     │
    │  Static: /docs (APIDOC_DIR), / (PUBLIC_DIR)         │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ Upstream→500 │ NotFound→404       │
    │  No route→404   │ Anything else→400                 │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator, Dict, List, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from cargosnap_proxy import __version__
from cargosnap_proxy.config import settings
from cargosnap_proxy.exceptions import NotFoundError, UpstreamError, ValidationError
from cargosnap_proxy.middleware.errors import UnexpectedErrorMiddleware, generic_error_response
from cargosnap_proxy.middleware.logging import RequestLoggingMiddleware
from cargosnap_proxy.middleware.request_id import RequestIDMiddleware, request_id_var
from cargosnap_proxy.routes import api_router, status

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Endpoint não encontrado."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, written to stdout
    where the process manager collects it.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's; httpx logs every outbound call at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Sets up logging and reports configuration problems on startup."""
    setup_logging()
    logger.info("=" * 60)
    logger.info("CargoSnap Proxy %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: /status stays reachable and upstream calls fail with 500
        logger.error("Configuration error: %s", str(e))

    logger.info("Upstream: %s (auth: %s)", settings.cargosnap_url or "<unset>", settings.cargosnap_auth_mode)
    logger.info("Registered %d routes", len(status.registered_routes()))
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    logger.info("CargoSnap Proxy shutting down...")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def describe_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """
    Turns pydantic/FastAPI validation errors into one readable message.

    The first element of each `loc` is the request part (body, query, path, form)
    and is dropped from the field name.
    """
    messages: List[str] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        field = ".".join(loc[1:]) or (loc[0] if loc else "body")
        error_type = error.get("type", "")

        if error_type == "json_invalid":
            messages.append("Corpo da requisição não é um JSON válido.")
        elif error_type == "missing":
            messages.append(f"O campo '{field}' é obrigatório.")
        else:
            messages.append(f"Campo '{field}' inválido: {error.get('msg', 'valor inválido')}.")
    return " ".join(messages) or "Dados inválidos."


def upstream_status(exc: UpstreamError) -> int:
    """HTTP status used to report an upstream failure to the client."""
    if settings.propagate_upstream_status and exc.status_code and exc.status_code >= 400:
        return exc.status_code
    return 500


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Every error body has the same shape: {"error": "<message>"}.

    Handler hierarchy:
        ValidationError / RequestValidationError → 400
        NotFoundError                            → 404
        UpstreamError                            → 500 (or upstream status)
        Starlette 404/405 (no matching route)    → 404 "Endpoint não encontrado."
        Exception (fallback)                     → 400 "Ocorreu algum erro."
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        message = describe_validation_errors(exc.errors())
        logger.warning("[%s] Invalid request to %s: %s", rid, request.url.path, message)
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(UpstreamError)
    async def handle_upstream_error(request: Request, exc: UpstreamError):
        # Already logged by the client at the point of failure
        return JSONResponse(status_code=upstream_status(exc), content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": NOT_FOUND_MESSAGE})
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Last resort for failures raised by the outer middleware themselves.

        Route errors never get here: UnexpectedErrorMiddleware answers them inside
        the CORS layer.
        """
        logger.error("Unexpected error outside the route layer: %s", str(exc), exc_info=exc)
        return generic_error_response()


# ══════════════════════════════════════════════════════════════════════════
# Static Files
# ══════════════════════════════════════════════════════════════════════════

def mount_static(app: FastAPI) -> None:
    """
    Mount the documentation and public directories when they exist.

    Mounted after the API routes, so routes always win; the public mount sits at
    "/" and therefore goes last. Missing files fall through to the 404 handler.
    """
    apidoc_dir = Path(settings.apidoc_dir)
    if apidoc_dir.is_dir():
        app.mount("/docs", StaticFiles(directory=apidoc_dir, html=True), name="apidoc")

    public_dir = Path(settings.public_dir)
    if public_dir.is_dir():
        app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="CargoSnap Proxy API",
        description=(
            "Proxy for the CargoSnap file-management API. Files, uploads, fields, "
            "reports, share links and forms are forwarded with a server-held token."
        ),
        version=__version__,
        # /docs serves the static API documentation directory
        docs_url="/api-docs",
        redoc_url=None,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → CORS → UnexpectedError
    app.add_middleware(UnexpectedErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(status.router)
    app.include_router(api_router, prefix=settings.api_prefix)

    mount_static(app)

    return app


# uvicorn expects `cargosnap_proxy.main:app` to be importable
app = create_app()
