"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from roombnb.api import rooms, users
from roombnb.config import get_settings
from roombnb.exceptions import InternalError
from roombnb.services.image_store import ImageStore, ImageStoreError

logger = logging.getLogger(__name__)

settings = get_settings()

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
}

# Leading entries of a validation error location that name the request part
REQUEST_PARTS = ("body", "query", "path", "header")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the image store shared by all requests."""
    app.state.image_store = ImageStore.from_settings(settings)
    if not settings.image_host_configured:
        logger.warning("Image host credentials are not set; picture uploads will fail")
    yield


app = FastAPI(
    title="Roombnb API",
    description="Room rental marketplace: accounts, listings and listing photos",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response


def message_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as ``{"message": ...}``; unmatched routes become 404."""
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return message_response(status.HTTP_404_NOT_FOUND, "Route not found")
    return message_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report the first invalid or missing request value."""
    errors = exc.errors()
    if not errors or errors[0].get("type") == "missing":
        return message_response(status.HTTP_400_BAD_REQUEST, "Missing parameter")
    location = errors[0].get("loc", ())
    field = ".".join(str(part) for part in location if part not in REQUEST_PARTS) or "request"
    return message_response(status.HTTP_400_BAD_REQUEST, f"Invalid parameter: {field}")


@app.exception_handler(ImageStoreError)
async def image_store_exception_handler(request: Request, exc: ImageStoreError):
    logger.error(f"Image host failure on {request.method} {request.url.path}: {exc}")
    return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Image host error: {exc}")


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database failure on {request.method} {request.url.path}")
    return message_response(InternalError.status_code, InternalError.message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return message_response(InternalError.status_code, InternalError.message)


# Register routers
app.include_router(users.router)
app.include_router(rooms.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
