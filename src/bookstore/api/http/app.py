"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.bookstore import __version__
from src.bookstore.api.http.app_data import ApplicationDependencies
from src.bookstore.api.http.responses import GENERIC_ERROR_MESSAGE, action_location
from src.bookstore.api.http.routers.authors import router as authors_router
from src.bookstore.api.http.routers.books import router as books_router
from src.bookstore.api.http.routers.users import router as users_router
from src.bookstore.api.utils.app_startup import configure_logging, flush_logging
from src.bookstore.core.services import (
    DbManageService,
    DbSessionService,
    JwtGeneratorService,
    JwtVerificationService,
)
from src.bookstore.runtime.config.config_data import DEV_SIGNING_KEY
from src.bookstore.runtime.context import get_config


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )
        return response


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": GENERIC_ERROR_MESSAGE},
                headers={"X-Request-ID": request_id},
            )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed bodies and path parameters with 400."""
    logger.warning(
        "{}: Invalid request: {}",
        action_location(request),
        [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()],
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


# --- Lifecycle hooks ---
async def startup(app: FastAPI) -> None:
    config = get_config()
    configure_logging()
    logger.info("Starting up application in {} environment", config.app.environment)

    if config.jwt.signing_key == DEV_SIGNING_KEY:
        logger.warning("Using the development JWT signing key")

    database_service = DbSessionService()
    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        jwt_generation_service=JwtGeneratorService(),
        jwt_verify_service=JwtVerificationService(),
    )

    if config.database.create_tables:
        manage = DbManageService(database_service)
        manage.create_all()
        manage.seed_roles()
        manage.seed_users()


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    app_dependencies.database_service.dispose()
    await flush_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)


def create_app() -> FastAPI:
    """Build the application from the active configuration."""
    config = get_config()
    is_production = config.app.environment == "production"

    # --- CORS configuration ---
    if is_production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    app = FastAPI(
        title=config.app.name,
        version=__version__,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    app.middleware("http")(log_requests)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # --- Router registration ---
    app.include_router(users_router)
    app.include_router(books_router)
    app.include_router(authors_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe; does not check dependencies."""
        return {"status": "healthy"}

    @app.get("/ready", response_model=None)
    def readiness(request: Request) -> dict[str, Any] | JSONResponse:
        """Readiness probe; 503 when the database is unreachable."""
        app_deps: ApplicationDependencies = request.app.state.app_dependencies
        if app_deps.database_service.health_check():
            return {"status": "ready", "database": "healthy"}
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not ready", "database": "unhealthy"},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # We handle access logging in middleware
    )
