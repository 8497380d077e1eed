"""
FastAPI application entry point.
Main application setup and configuration.
"""

from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from marketplace_api.config import Settings, get_settings
from marketplace_api.database import (
    check_database_connection,
    create_engine,
    create_session_factory,
    create_tables,
)
from marketplace_api.middleware import RequestContextMiddleware
from marketplace_api.routers import (
    auth_router,
    account_router,
    users_router,
    listings_router,
    favorites_router,
    upload_router,
)
from marketplace_api.schemas.envelope import error_body, success_response
from marketplace_api.services.error_handler import ErrorHandlerService
from marketplace_api.services.upload import UPLOADS_URL_PATH
from marketplace_api.utils.exceptions import APIException

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Creates missing tables on startup and disposes the engine on shutdown.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    if not settings.jwt_secret_key:
        logger.warning("JWT_SECRET_KEY is not set; authenticated endpoints will fail")

    db_connected = await check_database_connection(app.state.engine)
    if db_connected:
        await create_tables(app.state.engine)
    else:
        logger.error("Failed to connect to database on startup")

    yield

    logger.info("Shutting down application")
    await app.state.engine.dispose()


def register_exception_handlers(app: FastAPI) -> None:
    """Route every failure through ErrorHandlerService so it leaves as an envelope."""

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        return ErrorHandlerService.handle_api_exception(exc, request)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return ErrorHandlerService.handle_validation_error(exc, request)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        return ErrorHandlerService.handle_database_error(exc, request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return ErrorHandlerService.handle_http_exception(exc, request)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        return ErrorHandlerService.handle_unexpected_error(exc, request)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application. Settings, engine and session factory live on
    app.state; request handlers reach them through dependencies.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
    Marketplace API for buying and selling second-hand goods.

    ## Features

    * **Listings**: Create, browse, update and delete item listings
    * **Favorites**: Save listings to a private favorites list
    * **Accounts**: Registration, login, profile and password management
    * **Image Upload**: Validated image uploads usable as listing pictures

    ## Authentication

    Most endpoints require authentication. Use `/api/v1/auth/login` to obtain a JWT token,
    then include it in the Authorization header as `Bearer <token>`.

    ## Responses

    Every response body is an envelope: `{success, message, data, errors}`.
    """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "Authentication", "description": "Registration and login"},
            {"name": "Account", "description": "Operations on the caller's own account"},
            {"name": "Users", "description": "Public user profiles"},
            {"name": "Listings", "description": "Marketplace listings"},
            {"name": "Favorites", "description": "Saved listings"},
            {"name": "Upload", "description": "Image upload"},
            {"name": "Health", "description": "Service information and health"},
        ],
        lifespan=lifespan,
    )

    engine = create_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Processing-Time"],
    )

    app.add_middleware(
        RequestContextMiddleware,
        max_request_size=settings.max_file_size + 1024 * 1024,
        slow_request_threshold=settings.slow_request_threshold,
        enable_request_logging=not settings.is_testing,
    )

    # Include API routers
    for router in (auth_router, account_router, users_router, listings_router, favorites_router, upload_router):
        app.include_router(router, prefix=settings.api_v1_prefix)

    app.mount(UPLOADS_URL_PATH, StaticFiles(directory=settings.upload_dir), name="uploads")

    register_exception_handlers(app)

    @app.get("/", tags=["Health"])
    async def root():
        """Basic API information."""
        return success_response(
            f"Welcome to {settings.app_name}",
            {
                "name": settings.app_name,
                "version": settings.app_version,
                "environment": settings.environment,
                "documentation": {
                    "swagger_ui": "/docs",
                    "redoc": "/redoc",
                    "openapi_json": "/openapi.json"
                },
                "api_prefix": settings.api_v1_prefix
            }
        )

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint with database connectivity test.
        Used by container health checks and load balancers.
        """
        if not await check_database_connection(app.state.engine):
            return JSONResponse(status_code=503, content=error_body("Database connection failed"))

        return success_response(
            "Service is healthy",
            {
                "status": "healthy",
                "service": settings.app_name,
                "version": settings.app_version,
                "environment": settings.environment,
                "database": "connected"
            }
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "marketplace_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
