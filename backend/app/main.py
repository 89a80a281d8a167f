"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import auth, classify, competitors, debug, generate, prompts
from app.config import get_settings
from app.errors import AppError, UpstreamError
from app.services.startup_validation import validate_settings

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    validate_settings(settings)
    yield


app = FastAPI(
    title=settings.app_name,
    description="Generate page content from outline documents and spreadsheet prompts",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Convert service errors into ``{"error": ...}`` bodies."""
    if isinstance(exc, UpstreamError):
        logger.error(f"{request.url.path}: {exc.message}")
    else:
        logger.info(f"{request.url.path}: {exc.status_code} {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are 400s with the first validation message."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        message = str(first.get("msg", "Invalid request")).removeprefix("Value error, ")
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        if first.get("type") != "value_error" and location:
            message = f"{location}: {message}"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else is logged with its traceback and reported as a generic 500."""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Include routers
app.include_router(classify.router, tags=["classify"])
app.include_router(competitors.router, tags=["competitors"])
app.include_router(generate.router, tags=["generate"])
app.include_router(prompts.router, tags=["prompts"])
app.include_router(auth.router, tags=["auth"])
app.include_router(debug.router, tags=["debug"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "docs": "/docs",
    }
