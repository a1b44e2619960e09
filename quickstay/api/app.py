"""FastAPI application for the QuickStay listings API."""
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from quickstay import __version__
from quickstay.api import responses
from quickstay.api.routes import listings, uploads
from quickstay.config import settings
from quickstay.errors import QuickStayError

logger = logging.getLogger(__name__)

app = FastAPI(
    title="QuickStay Listings API",
    description="Accommodation listings (PG, rentals, hostels, co-living) and image uploads",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request."""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f} ms")
    return response


@app.exception_handler(QuickStayError)
async def quickstay_error_handler(request: Request, exc: QuickStayError):
    if exc.status_code >= 500:
        # Already logged with full detail where the storage call failed
        message = "Something went wrong" if settings.is_production else exc.message
        return responses.failure(message, exc.status_code)

    logger.warning(f"[{exc.status_code}] {request.method} {request.url.path}: {exc.message}")
    return responses.failure(exc.message, exc.status_code, exc.data)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies (e.g. invalid JSON) get the same envelope as field errors."""
    violations = []
    for err in exc.errors():
        loc = [part for part in err.get("loc", ()) if isinstance(part, str) and part != "body"]
        violations.append({"field": loc[0] if loc else "body", "message": err["msg"]})
    logger.warning(f"[400] {request.method} {request.url.path}: malformed request {violations}")
    return responses.failure("Validation failed", 400, violations)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error on {request.method} {request.url.path}", exc_info=exc)
    message = "Something went wrong" if settings.is_production else str(exc)
    return responses.failure(message, 500)


# API Routes
app.include_router(listings.router, prefix="/api/listings", tags=["listings"])
app.include_router(uploads.router, prefix="/api/uploads", tags=["uploads"])


@app.get("/")
async def index():
    """Service info."""
    return responses.success(
        "QuickStay API is running",
        {"documentation": "/docs", "version": __version__, "status": "active"},
    )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
