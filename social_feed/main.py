"""
Main FastAPI application for the social feed API.
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from social_feed.config import API_PREFIX, AUTO_CREATE_TABLES, DEBUG, LOG_LEVEL
from social_feed.db import init_db
from social_feed.errors import ServiceError
from social_feed.routes.activity import router as activity_router
from social_feed.routes.feed import router as feed_router
from social_feed.routes.follows import router as follows_router
from social_feed.routes.hashtags import router as hashtags_router
from social_feed.routes.health import API_VERSION
from social_feed.routes.health import router as health_router
from social_feed.routes.likes import router as likes_router
from social_feed.routes.posts import router as posts_router
from social_feed.routes.users import router as users_router

logger = logging.getLogger(__name__)


def _error(status_code: int, error_code: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error_code": error_code, "message": message, "details": details},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    if AUTO_CREATE_TABLES:
        init_db()
        logger.info("Database schema ready")
    yield


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Social Feed API",
        description="Users, posts, likes, follows, hashtags and activity feeds",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "[%s] %s %s - %.1fms", request.method, request.url.path, response.status_code, duration_ms
        )
        return response

    # Global exception handlers
    @app.exception_handler(ServiceError)
    async def service_exception_handler(request: Request, exc: ServiceError):
        """Handle client-facing errors raised by the services."""
        return _error(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed or out-of-range input is a 400, reported before any query runs."""
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
            for err in exc.errors()
        ]
        return _error(400, "VALIDATION_ERROR", "Request validation failed", errors)

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
        """Handle SQLAlchemy database errors."""
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return _error(
            500,
            "DATABASE_ERROR",
            "Database operation failed",
            str(exc) if app.debug else "Database connection issue",
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other unhandled exceptions."""
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return _error(
            500,
            "INTERNAL_ERROR",
            "An unexpected error occurred",
            str(exc) if app.debug else "Internal server error",
        )

    for router in (users_router, activity_router, posts_router, likes_router,
                   hashtags_router, follows_router, feed_router):
        app.include_router(router, prefix=API_PREFIX)
    app.include_router(health_router)

    @app.get("/")
    async def root():
        return {"message": "Welcome to the Social Feed API", "status": "healthy", "version": API_VERSION}

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("social_feed.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
