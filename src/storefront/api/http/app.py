"""FastAPI application setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, PlainTextResponse

from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.api.http.routers import health
from src.storefront.api.http.routers.service import coupon, product
from src.storefront.api.http.schemas import ErrorResponse
from src.storefront.api.utils.app_startup import configure_logging
from src.storefront.core.services import (
    AccessTokenService,
    CloudinaryService,
    DbSessionService,
)
from src.storefront.runtime.context import get_config

INTERNAL_ERROR_MESSAGE = "Internal server error!"


configure_logging()


def _error_body(message: str, errors: list | None = None) -> dict:
    return ErrorResponse(message=message, errors=errors).model_dump(
        by_alias=True, exclude_none=True
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )
        return response


async def startup(app: FastAPI) -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService()
    if config.database.create_tables:
        database_service.create_all()

    if not config.media.is_configured:
        logger.warning("Media host is not configured; image uploads will fail")
    if not config.auth.jwt_secret:
        logger.warning(
            "Access token secret is not configured; authenticated routes will reject every request"
        )

    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        media_service=CloudinaryService(config.media),
        access_token_service=AccessTokenService(config.auth),
    )


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    app_dependencies.database_service.dispose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)


def create_app() -> FastAPI:
    config = get_config()
    application = FastAPI(
        title="Storefront API",
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )

    @application.middleware("http")
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
            "user_agent": request.headers.get("user-agent", "unknown"),
        }

        start = time.perf_counter()
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
                    status_code=500,
                    content=_error_body(INTERNAL_ERROR_MESSAGE),
                    headers={"X-Request-ID": request_id},
                )

    # Registered after log_requests: its 500 responses need these headers too
    application.add_middleware(SecurityHeadersMiddleware)

    if config.app.environment == "production" and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )

    @application.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc.detail, str):
            body = _error_body(exc.detail)
        else:
            body = _error_body("Invalid request", errors=exc.detail)
        return JSONResponse(
            status_code=exc.status_code, content=body, headers=exc.headers
        )

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        logger.bind(error_count=len(exc.errors())).info("request.validation_error")
        # Raw inputs may be uploads or bytes; keep only the JSON-safe parts
        errors = [
            {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=422, content=_error_body("Invalid request", errors=errors)
        )

    application.include_router(health.router)
    application.include_router(product.router)
    application.include_router(coupon.router)

    @application.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return "Hello from E-Commerce backend"

    return application


app = create_app()

__all__ = ["app", "create_app", "startup", "shutdown"]


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    config = get_config()
    # Request logging middleware replaces the access log
    uvicorn.run(
        "src.storefront.api.http.app:app",
        host=config.app.host,
        port=config.app.port,
        access_log=False,
    )


if __name__ == "__main__":
    run()
