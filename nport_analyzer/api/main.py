"""
FastAPI Application - NPORT Analyzer

Main entry point for the REST API.
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import time
import logging
from typing import AsyncGenerator
from pathlib import Path

from .. import __version__
from ..config import get_settings, log_startup_diagnostics
from .schemas import ErrorResponse

# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Static web client, served at / when present
PUBLIC_DIR = Path(__file__).parent.parent.parent / "public"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan events.

    Runs on startup and shutdown.
    """
    settings = get_settings()

    # Startup
    logger.info("=" * 60)
    logger.info(f"NPORT Analyzer API v{__version__}")
    logger.info("=" * 60)

    log_startup_diagnostics(settings)

    logger.info(f"✅ NPORT Analyzer running at http://localhost:{settings.port}")
    logger.info("=" * 60)

    yield

    # Shutdown
    logger.info("Shutting down API...")


# Create FastAPI app
app = FastAPI(
    title="NPORT Analyzer API",
    description="""
    Find which funds hold a security, using SEC NPORT-P filings.

    ## Features
    - Full-text search of NPORT-P filings on SEC EDGAR
    - Holdings extraction from a single filing, filtered by security
    - Per-share price in USD and in the reported currency
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests"""
    start_time = time.time()

    logger.info(f"→ {request.method} {request.url.path}")

    response = await call_next(request)

    duration = (time.time() - start_time) * 1000
    logger.info(f"← {response.status_code} ({duration:.0f}ms)")

    return response


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error="Internal server error").model_dump(mode='json')
    )


# Import routers
from .routers import config, nport

app.include_router(config.router, prefix="/api", tags=["Config"])
app.include_router(nport.router, prefix="/api", tags=["NPORT"])

# Mounted last so API routes take precedence
if PUBLIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "nport_analyzer.api.main:app",
        host="0.0.0.0",
        port=get_settings().port,
        reload=True,
        log_level="info"
    )
