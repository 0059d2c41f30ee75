from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import time

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

# Load environment variables from .env file
load_dotenv()

from schoolmap.api.dependencies import get_school_repository
from schoolmap.api.v1 import schools
from schoolmap.api.v1.models import HealthResponse
from schoolmap.core.logging import setup_logging
from schoolmap.core.settings import get_settings
from schoolmap.repositories.base import SchoolRepository, StorageError

settings = get_settings()

# Setup logging
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schools table on startup and release connections on shutdown."""
    repository_provider = app.dependency_overrides.get(get_school_repository, get_school_repository)
    repository: SchoolRepository = repository_provider()
    try:
        repository.ensure_schema()
    except StorageError as e:
        # The API still starts; requests report storage failures individually.
        logger.error(f"Schema setup failed, continuing without it: {e}")

    logger.info("Available endpoints:")
    logger.info("- POST /addSchool")
    logger.info("- GET /listSchools?latitude={lat}&longitude={lon}")
    logger.info("- GET /health")
    yield
    repository.close()


app = FastAPI(title="School Management API", version="1.0.0", lifespan=lifespan)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests_middleware(request: Request, call_next):
    """Log incoming requests, their processing time, and handle unexpected errors."""
    start_time = time.time()
    method = request.method
    path = request.url.path

    logger.info(f"Request: {method} {path}")

    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            f"Response: {method} {path} - Status: {response.status_code} - Duration: {process_time:.4f}s"
        )
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"Error: {method} {path} - Exception: {str(e)} - Duration: {process_time:.4f}s",
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Internal server error"},
        )


# Include routers
app.include_router(schools.router)


@app.get("/health", response_model=HealthResponse, tags=["General"])
def health(repository: SchoolRepository = Depends(get_school_repository)):
    """Report that the API is up and whether the database answers."""
    return HealthResponse(
        timestamp=datetime.now(timezone.utc).isoformat(),
        database=repository.ping(),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    status_code = exc.status_code
    message = exc.detail
    # Unmatched paths and unmatched methods both answer as unknown endpoints
    if (status_code, message) in ((404, "Not Found"), (405, "Method Not Allowed")):
        status_code, message = 404, "API endpoint not found"
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Malformed request: {request.method} {request.url.path} - {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Request body must be a JSON object"},
    )


def main():
    logger.info(f"Starting server on {settings.HOST}:{settings.PORT}, environment: {settings.ENVIRONMENT}")
    uvicorn.run(
        "schoolmap.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.ENVIRONMENT == "development",  # Enable reload only in dev
    )


if __name__ == "__main__":
    main()
