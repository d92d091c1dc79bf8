"""
FastAPI application for the document structuring service.

Provides endpoints for:
- Signing up and signing in
- Uploading PDF/DOCX files with structured content extraction
- Listing, viewing, downloading and saving documents
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import get_settings
from .database import init_db
from .models import HealthResponse
from .routers import documents, users
from .services.extraction import get_extraction_service
from .services.file_storage import UPLOADS_URL_PREFIX, FileStorage

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()

# The static mount needs the directory to exist when the app is built
FileStorage(settings.upload_dir).ensure_dir()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting document structuring service...")
    logger.info("Upload directory: %s", settings.upload_dir)
    init_db()
    get_extraction_service()
    logger.info("Services initialized successfully")
    yield
    logger.info("Shutting down document structuring service...")


# Create FastAPI application
app = FastAPI(
    title="Document Structuring API",
    description="Upload PDF/DOCX files and edit their extracted structure",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS for the editor frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.frontend_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        message="Document Structuring API is running",
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__, message="Service is healthy")


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(users.router)
app.include_router(documents.router)

app.mount(
    UPLOADS_URL_PREFIX,
    StaticFiles(directory=settings.upload_dir),
    name="uploads",
)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as a plain message body."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies and parameters."""
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request body"},
    )
