"""
FastAPI entrypoint for the Fintrack backend application.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fintrack.core.config import Settings
from fintrack.core.exceptions import FintrackError
from fintrack.core.utils import format_error
from fintrack.api.router import api_router
from fintrack.db.session import build_engine, build_session_factory, init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    if settings.CREATE_TABLES:
        init_db(app.state.engine)
        logger.info("Database tables initialized")
    yield
    app.state.engine.dispose()


async def fintrack_error_handler(request: Request, exc: FintrackError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=format_error(exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=format_error("Invalid request", fields)
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=format_error("Server error")
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build an application with its own settings, engine and session factory."""
    if settings is None:
        settings = Settings()
    if settings.uses_dev_secret and not settings.DEBUG:
        logger.warning("SECRET_KEY is the development fallback; set it in the environment")

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Backend API for personal income and expense tracking",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(FintrackError, fintrack_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    return app


def run():
    """Serve the API with uvicorn on the configured host and port."""
    import uvicorn

    settings = Settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
