"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.dependencies import ServiceContainer, build_services
from app.models.errors import AppError, ValidationFailedError
from app.routers import assets, auth, places

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _validation_errors(exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix from the location
        location = [str(part) for part in error.get("loc", ())[1:]]
        errors.append({"field": ".".join(location), "message": error.get("msg", "")})
    return errors


def _validation_failed_response(errors, message: str = "Validation failed") -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message, "errors": errors},
    )


def create_app(
    settings: Optional[Settings] = None,
    services: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use instead of the environment
        services: Prebuilt service container; when given, the lifespan neither
            builds nor closes it
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = services is None
        container = services or await build_services(settings)
        app.state.services = container
        logger.info(f"Place Assets API started ({settings.environment})")
        try:
            yield
        finally:
            if owned:
                await container.close()
            logger.info("Place Assets API stopped")

    development = settings.environment == "development"
    app = FastAPI(
        title="Place Assets API",
        description="Registers Google Places as assets enriched with AI-generated content",
        version=API_VERSION,
        docs_url="/docs" if development else None,
        redoc_url="/redoc" if development else None,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.frontend_url,
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = _validation_errors(exc)
        logger.warning(f"Validation failed for {request.method} {request.url.path}: {errors}")
        return _validation_failed_response(errors)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if isinstance(exc, ValidationFailedError):
            return _validation_failed_response(exc.errors, exc.message)
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # Include routers
    app.include_router(auth.router)
    app.include_router(places.router)
    app.include_router(places.gplace_router)
    app.include_router(assets.router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Welcome to the Place Assets API",
            "version": API_VERSION,
            "docs": "/docs" if development else "disabled",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
