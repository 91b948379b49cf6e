"""FastAPI application for the Job Application Tracker"""

import sys
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import time

from job_tracker.exceptions import InsightComputationError, StorageError

from .config import get_settings
from .database import ApplicationDatabase
from .dependencies import get_database, get_event_bus
from .routers import applications_router, email_router

# Get settings
settings = get_settings()

# Configure logging based on environment
log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
logging.basicConfig(
    level=log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown"""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")

    try:
        db = get_database()
        get_event_bus()
        logger.info(f"Database ready at {db.db_path} with {db.count()} applications")
    except StorageError as e:
        logger.warning(f"Database initialization failed: {e}")

    yield

    # Shutdown
    logger.info("Shutting down Job Tracker API")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Job Application Tracker API

    Track job applications and learn which parts of your search are working.

    ## Features
    - **Applications**: Create, update, and delete tracked applications
    - **Insights**: Rejection rate by source, resume version performance, response times
    - **Weekly Summary**: A combined report with key findings and recommendations, optionally emailed
    """,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=600,
)

# Add GZip compression for responses > 1KB
app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request timing and logging middleware
@app.middleware("http")
async def request_middleware(request: Request, call_next):
    start_time = time.time()
    request_id = f"{int(start_time * 1000)}"

    if settings.debug:
        logger.debug(f"[{request_id}] {request.method} {request.url.path}")

    try:
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Process-Time"] = f"{process_time:.3f}"
        response.headers["X-Request-ID"] = request_id

        if process_time > settings.slow_request_seconds:
            logger.warning(
                f"[{request_id}] Slow request: {request.method} {request.url.path} "
                f"took {process_time:.2f}s"
            )

        return response

    except Exception as e:
        logger.error(f"[{request_id}] Request failed: {e}", exc_info=True)
        raise


# ============== Exception Handlers ==============

@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    logger.error(f"Storage unavailable: {exc}")
    return JSONResponse(
        status_code=503,
        content={
            "error": "Storage unavailable",
            "detail": str(exc) if settings.debug else "The application database could not be reached",
            "path": str(request.url.path),
        },
    )


@app.exception_handler(InsightComputationError)
async def insight_exception_handler(request: Request, exc: InsightComputationError):
    return JSONResponse(
        status_code=500,
        content={
            "error": type(exc).__name__,
            "detail": str(exc),
            "path": str(request.url.path),
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    detail = str(exc) if settings.debug else "An unexpected error occurred"

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": detail,
            "path": str(request.url.path),
        },
    )


# Include routers
app.include_router(applications_router)
app.include_router(email_router)


# Health check endpoint
@app.get("/health", tags=["health"])
async def health_check(db: ApplicationDatabase = Depends(get_database)):
    """Health check endpoint for load balancers and monitoring"""
    try:
        applications = db.count()
        database_status = "healthy"
    except StorageError:
        applications = None
        database_status = "unavailable"

    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
        "database_status": database_status,
        "applications": applications,
    }


# Root endpoint
@app.get("/", tags=["root"])
async def root():
    """Root endpoint with API info"""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "docs": "/docs" if settings.docs_enabled else "Disabled",
        "health": "/health",
        "applications": "/api/applications",
        "insights": "/api/applications/insights",
    }


# Run with: python -m job_tracker.ui.api.main
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "job_tracker.ui.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level,
        access_log=settings.debug,
    )
