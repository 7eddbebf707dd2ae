import os
import subprocess
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request, status as http_status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rental_admin.config.logger import app_logger, log_request, log_request_error
from rental_admin.config.settings import Settings, settings as default_settings
from rental_admin.db.db import Database
from rental_admin.db.seed import ensure_sample_listings, ensure_seed_admin_user
from rental_admin.utils.errors import AppError
from rental_admin.utils.responses import error_response
from rental_admin.api.auth.router import router as auth_router
from rental_admin.api.listings.router import router as listings_router
from rental_admin.api.audit.router import router as audit_router


_git_sha_cache: Optional[str] = None


def get_git_sha() -> str:
    """Get the current Git commit SHA (cached to avoid blocking)."""
    global _git_sha_cache
    if _git_sha_cache is not None:
        return _git_sha_cache

    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            timeout=1.0
        )
        _git_sha_cache = result.stdout.strip()[:8]
        return _git_sha_cache
    except (subprocess.CalledProcessError, FileNotFoundError, subprocess.TimeoutExpired):
        _git_sha_cache = "local-dev"
        return _git_sha_cache


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager for startup and shutdown events."""
    settings: Settings = app.state.settings
    app_logger.info(f"{settings.APP_NAME} starting up")

    db = Database(settings.effective_database_url)
    app.state.db = db

    try:
        await db.init()
        async with db.session() as session:
            await ensure_seed_admin_user(
                session,
                settings.SEED_ADMIN_USERNAME,
                settings.SEED_ADMIN_PASSWORD,
            )
            if settings.SEED_SAMPLE_LISTINGS:
                await ensure_sample_listings(session)
    except Exception as e:
        app_logger.error(f"Failed to initialize database: {e}")
        app_logger.warning("Running in limited mode: data endpoints will return 503")

    app_logger.info("Application initialized successfully")

    yield

    await db.close()
    app_logger.info(f"{settings.APP_NAME} shutdown complete")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as 400 with the first problem."""
    errors = exc.errors()
    if not errors:
        return error_response(http_status.HTTP_400_BAD_REQUEST, "Invalid request")
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return error_response(
        http_status.HTTP_400_BAD_REQUEST,
        f"{field}: {message}" if field else message,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort 500 for failures raised outside a route's own error handling."""
    app_logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(http_status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application for the given settings."""
    settings = settings or default_settings

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests with timing information using Loguru."""
        start_time = datetime.now()
        try:
            response = await call_next(request)
            process_time = (datetime.now() - start_time).total_seconds()
            log_request(request, response.status_code, process_time)
            return response

        except Exception as e:
            process_time = (datetime.now() - start_time).total_seconds()
            log_request_error(request, e, process_time)
            raise

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/", tags=["health"])
    async def root():
        """Root endpoint with basic API information."""
        return {
            "message": f"Welcome to {settings.APP_NAME} API",
            "version": settings.APP_VERSION,
            "status": "operational",
            "docs": "/docs",
            "redoc": "/redoc"
        }

    @app.get("/status", tags=["health"])
    async def status():
        """Status endpoint with build information for CI/CD monitoring."""
        build_number = os.getenv("BUILD_NUMBER", "local-dev")
        git_sha = os.getenv("GIT_SHA", os.getenv("GITHUB_SHA", get_git_sha()))
        environment = os.getenv("ENVIRONMENT", os.getenv("ENV", "development"))

        return {
            "status": "ok",
            "build": build_number,
            "sha": git_sha,
            "env": environment
        }

    @app.get("/health/db", tags=["health"])
    async def health_db(request: Request):
        """Database health endpoint."""
        is_ok, message = await request.app.state.db.ping()
        if not is_ok:
            return JSONResponse(
                status_code=http_status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "degraded", "db": "unavailable", "message": message}
            )
        return {"status": "ok", "db": "available", "message": message}

    app.include_router(auth_router)
    app.include_router(listings_router)
    app.include_router(audit_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    app_logger.info("Starting Rental Admin API server")

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_config=None  # Use our custom logger
    )
