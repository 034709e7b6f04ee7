"""
FallGuard Backend - FastAPI Application Entry Point

REST API for fall-risk screening, fall and exercise logging, and caretaker
monitoring of elderly patients.
"""

import traceback
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.logging import setup_logging, log_request_middleware
from core.database import engine, Base
import models  # noqa: F401  registers tables on Base.metadata
from api.v1 import auth, users, screening, falls, exercise, favorites, demo_data
from schemas.common import HealthCheckResponse
from schemas.responses import StandardErrorResponse

# Setup logging
logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting FallGuard Backend application...", env=settings.ENV)

    # Create database tables (for development)
    if settings.ENV == "development":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created (development mode)")

    yield

    await engine.dispose()
    logger.info("Shutting down FallGuard Backend application...")


# Create FastAPI application
app = FastAPI(
    title="FallGuard Backend API",
    description="Fall-risk tracking backend for elderly patients and their caretakers",
    version=settings.VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan,
)


# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)

if settings.ENABLE_REQUEST_LOGGING:
    app.middleware("http")(log_request_middleware)


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def error_content(message, detail=None, stack=None) -> dict:
    body = StandardErrorResponse(message=message, detail=detail, stack=stack)
    return jsonable_encoder(body, exclude={"stack"} if stack is None else None)


def jsonable_errors(errors):
    """Pydantic error dicts may carry exception objects under 'ctx'."""
    cleaned = []
    for error in errors:
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        error.pop("url", None)
        cleaned.append(error)
    return jsonable_encoder(cleaned)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation exceptions."""
    errors = exc.errors()
    logger.warning(
        f"Validation Exception: {errors} | "
        f"Path: {request.url.path} | "
        f"Method: {request.method} | "
        f"Client: {_client_host(request)}"
    )
    user_message = errors[0].get("msg", "Invalid input data") if errors else "Invalid input data"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_content(user_message, jsonable_errors(errors)),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"HTTP Exception: {exc.detail} | "
        f"Path: {request.url.path} | "
        f"Method: {request.method} | "
        f"Client: {_client_host(request)}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_content(str(exc.detail), str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity Exception: {exc.orig} | Path: {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_content("Request conflicts with existing data"),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Server Exception: {exc} | "
        f"Path: {request.url.path} | "
        f"Method: {request.method} | "
        f"Client: {_client_host(request)}",
        exc_info=exc,
    )
    stack = None
    if settings.DEBUG:
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_content("Internal server error", str(exc), stack),
    )


@app.get("/api/health", response_model=HealthCheckResponse, tags=["Health"])
async def health_check():
    return HealthCheckResponse(status="ok", timestamp=datetime.now(timezone.utc), version=settings.VERSION)


# Include API routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(exercise.router, prefix="/api/users", tags=["Exercise"])
app.include_router(screening.router, prefix="/api/screening", tags=["Screening"])
app.include_router(falls.router, prefix="/api/falls", tags=["Falls"])
app.include_router(favorites.router, prefix="/api/tai-chi", tags=["Tai-Chi"])
app.include_router(demo_data.router, prefix="/api", tags=["Demo Data"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
