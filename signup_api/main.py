# FILE: signup_api/main.py
# Scop:
#   - Entry-point FastAPI (factory create_app: middleware, routers, handlers, lifespan).
#   - Database (pool) se construiește o singură dată per app și se ține în app.state.
#   - Lifespan: bootstrap DB DOAR în dev (DB_AUTO_CREATE=true), verificare DB la startup,
#     dispose() la shutdown (uvicorn transformă SIGINT/SIGTERM în shutdown).
#
# Debug / depanare:
#   - Dacă serverul NU pornește:
#       journalctl -u signup-api -n 200 --no-pager
#     Caută ImportError / config missing / stacktrace.
#   - Dacă /api/health dă 503: DB nu e accesibilă (vezi logul "Eroare la conectarea cu baza de date").
#   - Dacă POST /api/signup dă 500 "signups table not found": rulează migrațiile.
#
# Note:
#   - Toate răspunsurile sunt JSON cu `success`; erorile au forma {success: false, error: ...}.
#   - 422 din FastAPI (body invalid) e convertit în 400.

import logging
import os
import signal
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, settings
from .database import Database
from .errors import InternalError
from .middleware.security_headers import SecurityHeadersMiddleware
from .routes import health, signups
from .services.signups.verify_database import verify_database

logging.basicConfig(
    level=logging.INFO if settings.debug else logging.WARNING,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _pool_fatal_handler(cfg: Settings):
    def handler(exc: BaseException) -> None:
        logger.critical(
            "Eroare fatală în pool-ul de conexiuni: %s. Procesul trebuie repornit de supervisor.",
            exc,
        )
        if cfg.db_exit_on_pool_error:
            os.kill(os.getpid(), signal.SIGTERM)

    return handler


def _error_response(status_code: int, message: str, *, details: Optional[str] = None, headers=None) -> JSONResponse:
    content = {"success": False, "error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def create_app(cfg: Optional[Settings] = None, *, database: Optional[Database] = None) -> FastAPI:
    cfg = cfg or settings
    db = database or Database.from_settings(cfg, on_fatal=_pool_fatal_handler(cfg))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Dev bootstrap DB (în prod: migrații)
        if cfg.db_auto_create:
            await run_in_threadpool(db.create_all)

        base = f"http://localhost:{cfg.port}"
        logger.info("Server pornit pe %s", base)
        logger.info("Endpoint signup: %s/api/signup", base)
        logger.info("Endpoint listare: %s/api/signups", base)
        logger.info("Endpoint health: %s/api/health", base)

        # blocant (până la DB_CONNECT_TIMEOUT_MS) => în threadpool, nu pe event loop
        await run_in_threadpool(verify_database, db)
        yield

        logger.info("Oprire server, închidem pool-ul DB...")
        await run_in_threadpool(db.dispose)

    app = FastAPI(
        title="Signup API",
        description="Colectare signups (name, email, role) cu email unic case-insensitive.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = cfg
    app.state.database = db

    # Security headers
    app.add_middleware(SecurityHeadersMiddleware, is_debug=cfg.debug)

    # CORS (formularul de signup e servit de pe alt domeniu)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(signups.router)
    app.include_router(health.router)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Toate HTTPException (inclusiv taxonomia din errors.py) => {success: false, error}.
        În DEBUG, la InternalError adăugăm cauza (doar dev/staging).
        """
        details = None
        if cfg.debug and isinstance(exc, InternalError) and exc.__cause__ is not None:
            details = str(exc.__cause__)
        return _error_response(exc.status_code, str(exc.detail), details=details, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = str(exc.errors()) if cfg.debug else None
        return _error_response(400, "invalid request body", details=details)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Handler global:
          - în DEBUG: expune excepția (doar dev/staging)
          - în PROD: răspuns generic (nu leak-uim detalii)
        """
        logger.exception("Unhandled server error at %s %s", request.method, request.url.path)
        details = f"Unhandled error: {exc}" if cfg.debug else None
        return _error_response(500, "internal server error", details=details)

    return app


app = create_app()
