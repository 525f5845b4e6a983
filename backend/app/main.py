"""
Main FastAPI application.
"""
import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.api import api_router
from app.core.analytics import AnalyticsTracker
from app.core.config import settings
from app.core.error_responses import ErrorMessages
from app.core.logging_config import setup_logging
from app.middleware import RequestLoggingMiddleware, RequestSizeLimitMiddleware
from app.models import Base, engine

# Initialize logging configuration at startup
setup_logging()

logger = logging.getLogger(__name__)

# Quiz source text is capped well below this; the margin covers JSON overhead
MAX_REQUEST_BODY_BYTES = 1024 * 1024


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan event handler.

    On startup, creates any missing database tables.
    """
    Base.metadata.create_all(bind=engine)
    logger.info(
        f"{settings.APP_NAME} {settings.APP_VERSION} started "
        f"(env={settings.ENV}, quiz_generation="
        f"{'enabled' if settings.GEMINI_API_KEY else 'disabled'})"
    )

    yield

    engine.dispose()
    logger.info("Application shutting down - database connections closed")


# OpenAPI tags metadata
tags_metadata = [
    {
        "name": "health",
        "description": "Health check endpoints for monitoring application status",
    },
    {
        "name": "auth",
        "description": "Registration and email sign-in for teachers and students",
    },
    {
        "name": "exams",
        "description": "Exam creation from text, room-code join and answer submission",
    },
    {
        "name": "results",
        "description": "Leaderboards, statistics, CSV export and student history",
    },
]


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
        description=(
            "**SmartExam API** - AI-generated multiple-choice exams for classrooms.\n\n"
            "* Teachers upload text and receive a generated quiz with a room code\n"
            "* Students join by room code and submit their answers\n"
            "* Teachers review results, statistics and a t-test against guessing\n\n"
            "## Authentication\n\n"
            "Endpoints require a JWT Bearer token from `/v1/auth/login` "
            "or `/v1/auth/register`."
        ),
        docs_url=f"{settings.API_V1_PREFIX}/docs",
        redoc_url=f"{settings.API_V1_PREFIX}/redoc",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        openapi_tags=tags_metadata,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(RequestSizeLimitMiddleware, max_body_size=MAX_REQUEST_BODY_BYTES)

    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handle HTTP exceptions and track them in analytics.
        """
        if exc.status_code >= 400:
            AnalyticsTracker.track_api_error(
                method=request.method,
                path=str(request.url.path),
                error_type="HTTPException",
                error_message=str(exc.detail),
            )

        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """
        Handle request validation errors.
        """
        errors = [
            {
                "loc": list(error.get("loc", [])),
                "msg": str(error.get("msg", "")),
                "type": str(error.get("type", "")),
            }
            for error in exc.errors()
        ]

        AnalyticsTracker.track_api_error(
            method=request.method,
            path=str(request.url.path),
            error_type="ValidationError",
            error_message=str(errors),
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": errors},
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """
        Handle unexpected exceptions.

        Each exception gets a unique error_id that is logged with the full
        traceback and returned to the client for support requests.
        """
        error_id = str(uuid.uuid4())

        logger.exception(
            f"Unhandled exception [error_id={error_id}]: {exc}",
            extra={"error_id": error_id},
        )

        AnalyticsTracker.track_api_error(
            method=request.method,
            path=str(request.url.path),
            error_type=exc.__class__.__name__,
            error_message=str(exc),
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": ErrorMessages.INTERNAL_ERROR, "error_id": error_id},
        )

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.APP_VERSION,
            "docs": f"{settings.API_V1_PREFIX}/docs",
        }

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info",
    )
