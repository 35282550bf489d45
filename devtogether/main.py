"""
Main Application Entry Point
============================

Responsibilities:
- Initialize FastAPI application
- Configure middleware stack
- Register API routers
- Set up exception handlers
- Provide health check endpoints
- Configure CORS

The service is a thin host adapter: every decision is made by the
pure policy engines in ``devtogether.services``.
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from devtogether.core.config import Settings, get_settings
from devtogether.core.exceptions import DevTogetherException
from devtogether.core.logging import configure_logging, get_logger
from devtogether.middleware.request_context import RequestContextMiddleware
from devtogether.routes import access_routes, notification_routes
from devtogether.services.access_policy import get_access_policy

# Initialize logger
logger = get_logger(__name__)


# =====================================
# Application Lifespan Handler
# =====================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup and shutdown events.

    Startup:
    - Configure logging
    - Log application start
    """
    settings = get_settings()
    configure_logging()

    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        yield
    except asyncio.CancelledError:
        logger.debug("application_shutdown_requested")
        raise
    finally:
        logger.info("application_shutdown_complete")


# =====================================
# Exception Handlers
# =====================================

async def devtogether_exception_handler(request: Request, exc: DevTogetherException):
    """
    Handle custom DevTogether exceptions.

    Converts custom exceptions to proper HTTP responses.
    """
    logger.warning(
        "devtogether_exception",
        exception_type=type(exc).__name__,
        message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "message": exc.message,
            "details": exc.details,
        },
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors.

    Provides detailed error messages for invalid requests.
    """
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        })

    logger.warning(
        "request_validation_error",
        path=request.url.path,
        errors=errors,
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "message": "Validation error",
            "details": {"errors": errors},
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected exceptions.

    Logs the error and returns a generic error message.
    """
    logger.error(
        "unhandled_exception",
        exception_type=type(exc).__name__,
        message=str(exc),
        path=request.url.path,
        method=request.method,
        exc_info=True,
    )

    # Don't expose internal errors in production
    if get_settings().is_production:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": "An unexpected error occurred",
                "details": {},
            },
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "message": str(exc),
            "details": {"type": type(exc).__name__},
        },
    )


# =====================================
# FastAPI App Initialization
# =====================================

def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; defaults to the environment settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="""
        DevTogether - Access & Notification Policy Service

        ## Features

        * **Route Access Policy**: Loading, allow or redirect verdicts per navigation
        * **Organization Lifecycle**: Pending, rejected and blocked organizations are gated
        * **Notification Routing**: Role-aware deep links for every notification type
        * **Notification Context**: Priority, category and action text for display

        Session facts are passed explicitly with every request.
        """,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,  # Cache preflight requests for 1 hour
    )

    # Request id and timing
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(DevTogetherException, devtogether_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(access_routes.router, prefix=settings.api_prefix)
    app.include_router(notification_routes.router, prefix=settings.api_prefix)

    # =====================================
    # Health Check Endpoints
    # =====================================

    @app.get(
        "/",
        tags=["Health"],
        summary="Basic Health Check",
        description="Returns basic service status information.",
    )
    def health_check():
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
        }

    @app.get(
        "/health",
        tags=["Health"],
        summary="Detailed Health Check",
        description="Returns health status including policy engine readiness.",
    )
    def detailed_health_check():
        """
        Detailed health check endpoint.

        Returns:
            Health status including the loaded rule and route counts
        """
        engine = get_access_policy()
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "checks": {
                "access_rules": len(engine.rules),
                "routes": len(engine.route_table.routes),
            },
        }

    @app.get(
        "/info",
        tags=["Health"],
        summary="Service Information",
        description="Returns the access rule order and the declared routes.",
    )
    def service_info():
        engine = get_access_policy()
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "api_prefix": settings.api_prefix,
            "access_rules": [rule.name for rule in engine.rules],
            "routes": [
                {"pattern": route.pattern, "guard": route.guard.value}
                for route in engine.route_table.routes
            ],
        }

    return app


app = create_app()
