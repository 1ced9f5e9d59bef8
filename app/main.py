# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the CSV Profiler API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main          (host, port and reload from settings)
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    ProfilerAPIException,
    analysis_exception_handler,
    profiler_exception_handler,
)
from app.routers import analysis, health
from app.routers.health import API_VERSION
from lib.errors import AnalysisError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the effective configuration on startup.
    """
    logger.info(f"Starting CSV Profiler API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(
        f"Uploads: {settings.allowed_extensions_list}, max {settings.MAX_UPLOAD_SIZE_MB}MB"
    )

    yield

    logger.info("Shutting down CSV Profiler API")


# Create FastAPI application
app = FastAPI(
    title="CSV Profiler API",
    description="""
## CSV Column Type Inference

Upload a CSV file and get back, for every column, its most likely type with a
confidence score and a set of statistics.

### Detected Types

Integer, Float, Boolean, Date, DateTime, Time, Email, URL, IP address, and
String as the fallback.

### Per-Column Statistics

- Total, analyzed, unique and null value counts
- Minimum and maximum under the column type's ordering
- Shortest and longest value length
- Up to 5 distinct example values

### Quick Start

```bash
# Analyze a file
curl -X POST http://localhost:8000/api/v1/analyze \\
  -F "file=@data.csv"

# Analyze the first 1000 values of each column only
curl -X POST "http://localhost:8000/api/v1/analyze?sample_size=1000" \\
  -F "file=@data.csv"

# Download the report as CSV
curl -X POST http://localhost:8000/api/v1/analyze/export \\
  -F "file=@data.csv" -o data_analysis.csv
```
""",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Analysis",
            "description": "Analyze CSV files and export reports",
        },
        {
            "name": "Health",
            "description": "API health and liveness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(ProfilerAPIException)
async def handle_profiler_exception(request: Request, exc: ProfilerAPIException):
    """Handle HTTP-level profiler exceptions."""
    return await profiler_exception_handler(request, exc)


@app.exception_handler(AnalysisError)
async def handle_analysis_error(request: Request, exc: AnalysisError):
    """Handle errors raised by the analysis engine."""
    return await analysis_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Analysis endpoints
app.include_router(
    analysis.router,
    prefix="/api/v1",
    tags=["Analysis"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "CSV Profiler API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/api/v1/health",
    }


# =============================================================================
# Entry Point
# =============================================================================

def run() -> None:
    """Serve the app with uvicorn on API_HOST:API_PORT."""
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
