# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager

from db import get_db_service
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.errors import ApplicationIncompleteError, ConfigurationError, ValidationError
from .routes import applications, audit, health
from .schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application startup/shutdown lifecycle."""
    logger.info(
        "Starting %s (allow_warning_sections=%s, auth_disabled=%s)",
        settings.APP_NAME,
        settings.ALLOW_WARNING_SECTIONS,
        settings.AUTH_DISABLED,
    )
    yield
    await get_db_service().dispose()


app = FastAPI(
    title="Board Package API",
    description="Completeness checks, manual overrides and submission for board package applications",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-User-Id", "X-User-Role", "X-User-Email", "X-Request-Id"],
)

_HTTP_STATUS_TITLES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def _request_id(request: Request) -> str:
    return request.headers.get("x-request-id") or str(uuid.uuid4())


def _build_error(
    status_code: int,
    detail: str,
    request_id: str,
    missing_sections: list[str] | None = None,
) -> ErrorResponse:
    return ErrorResponse(
        type="about:blank",
        title=_HTTP_STATUS_TITLES.get(status_code, "Error"),
        status=status_code,
        detail=detail,
        request_id=request_id,
        missing_sections=missing_sections,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException to RFC 7807 Problem Details."""
    request_id = _request_id(request)
    body = _build_error(exc.status_code, str(exc.detail), request_id)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert Pydantic validation errors to RFC 7807 Problem Details."""
    request_id = _request_id(request)
    body = _build_error(422, str(exc.errors()), request_id)
    return JSONResponse(status_code=422, content=body.model_dump(exclude_none=True))


@app.exception_handler(ApplicationIncompleteError)
async def incomplete_application_handler(request: Request, exc: ApplicationIncompleteError):
    """Submission gate rejection: 400 listing the unsatisfied sections."""
    request_id = _request_id(request)
    body = _build_error(400, str(exc), request_id, missing_sections=exc.missing_sections)
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


@app.exception_handler(ValidationError)
async def domain_validation_handler(request: Request, exc: ValidationError):
    """Input the completeness services reject (e.g. an application with no sections)."""
    body = _build_error(422, str(exc), _request_id(request))
    return JSONResponse(status_code=422, content=body.model_dump(exclude_none=True))


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    """Stored data the service cannot interpret (unknown transaction type)."""
    request_id = _request_id(request)
    logger.error("Configuration error (request_id=%s): %s", request_id, exc)
    body = _build_error(500, str(exc), request_id)
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    request_id = _request_id(request)
    logger.exception("Unhandled exception (request_id=%s)", request_id)
    body = _build_error(500, "An unexpected error occurred.", request_id)
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


# Include routers
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(applications.router, prefix="/api/applications", tags=["applications"])
app.include_router(audit.router, prefix="/api/applications", tags=["audit"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": "Welcome to the Board Package API"}
