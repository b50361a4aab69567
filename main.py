#!/usr/bin/env python3

"""
Main application entry point for the Movie Tracker API.

Architecture: FastAPI application with an explicit database handle and an OMDb catalog client.
Key Features: Lifecycle management, database health checks, error handling, CORS configuration.
"""

import asyncio
import sys

# Add this block to switch asyncio event loop policy on Windows
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

import errno
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from movie_tracker.api.auth import router as auth_router
from movie_tracker.api.http import router as http_router
from movie_tracker.api.movies import router as movies_router
from movie_tracker.api.reviews import router as reviews_router
from movie_tracker.api.watchlist import router as watchlist_router
from movie_tracker.config import settings
from movie_tracker.db import AppDatabase
from movie_tracker.exceptions import MovieTrackerError
from movie_tracker.services.catalog_interface import MovieCatalog
from movie_tracker.services.omdb_client import OmdbClient
from movie_tracker.utils.logger import setup_logger

logger = setup_logger("main")

HTTP_ERROR_KINDS = {
    status.HTTP_401_UNAUTHORIZED: "unauthenticated",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}


def build_lifespan(database_url: str | None, catalog: MovieCatalog | None):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application startup...")
        try:
            logger.info("Initializing database...")
            database = AppDatabase(
                database_url or settings.app_database_url, settings.schema_name
            )
            app.state.database = database
            await database.init_db()
            logger.info("Database initialization complete.")

            logger.info("Checking database connectivity...")
            await database.check_connection()
            logger.info("Database connectivity confirmed.")

            app.state.catalog = catalog or OmdbClient(
                api_key=settings.omdb_api_key,
                base_url=settings.omdb_base_url,
                timeout=settings.omdb_timeout_seconds,
            )
            logger.info(f"Movie catalog ready: {type(app.state.catalog).__name__}")

        except Exception as e:
            logger.critical(f"Startup error: {e}")
            raise SystemExit(f"Startup failed: {e}") from e

        logger.info("Movie Tracker API startup successful.")

        yield

        logger.info("Movie Tracker API shutdown...")
        await app.state.catalog.close()
        await app.state.database.close()
        logger.info("Shutdown complete.")

    return lifespan


def create_app(database_url: str | None = None, catalog: MovieCatalog | None = None):
    """
    Build the application.

    ``database_url`` overrides MOVIE_TRACKER_DATABASE_URL and ``catalog``
    replaces the OMDb client; both exist so tests can run against an in-memory
    database and a stub catalog.
    """
    app = FastAPI(
        title="Movie Tracker API", lifespan=build_lifespan(database_url, catalog)
    )

    @app.exception_handler(MovieTrackerError)
    async def movie_tracker_exception_handler(request: Request, exc: MovieTrackerError):
        if exc.status_code >= 500:
            logger.error(f"{exc.kind} on {request.url.path}: {exc.message}")
        else:
            logger.info(f"{exc.kind} on {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "kind": HTTP_ERROR_KINDS.get(exc.status_code, "http_error"),
                "detail": exc.detail,
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        return JSONResponse(
            status_code=422,
            content={
                "kind": "validation_error",
                "detail": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(OSError)
    async def oserror_exception_handler(request: Request, exc: OSError):
        logger.error(
            f"OSError caught: {exc}, errno: {exc.errno}, winerror: {getattr(exc, 'winerror', None)}"
        )
        is_timeout_or_refused = False
        if hasattr(exc, "winerror") and exc.winerror == 121:
            is_timeout_or_refused = True
        elif exc.errno in [errno.ETIMEDOUT, errno.ECONNREFUSED]:
            is_timeout_or_refused = True

        if is_timeout_or_refused:
            logger.error(
                f"Returning 503 due to DB connection issue: {settings.db_unavailable_hint}"
            )
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "kind": "database_unavailable",
                    "detail": settings.db_unavailable_hint,
                },
            )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "kind": "error",
                "detail": f"An unexpected OS error occurred: {exc}",
            },
        )

    app.include_router(http_router)
    app.include_router(auth_router)
    app.include_router(movies_router)
    app.include_router(watchlist_router)
    app.include_router(reviews_router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    return app


app = create_app()


def main():
    """
    Start the FastAPI application with uvicorn.
    """
    port = int(settings.server_port)
    host = settings.server_host

    logger.info(f"Starting Movie Tracker API server on {host}:{port}")

    try:
        uvicorn.run(app, host=host, port=port, workers=settings.server_workers)
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
