"""
Subscription API - FastAPI Application

Main entry point for the backend API.
Provides CRUD endpoints for subscriptions and a cost summary.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from subscription_api.api.middleware import RequestLoggingMiddleware
from subscription_api.api.routes import subscriptions, summary
from subscription_api.config.settings import settings
from subscription_api.infrastructure.exceptions import (
    SubscriptionAPIError,
    ValidationError,
    NotFoundError,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    logger.info(f"Subscription API starting in {settings.environment} mode...")

    from subscription_api.infrastructure.db.database import init_db, close_db

    try:
        await init_db()
        logger.info("Database connection pool initialized")
    except Exception as e:
        logger.warning(f"Database initialization failed, requests will report store errors: {e}")

    yield

    # Shutdown
    await close_db()
    logger.info("Subscription API shutting down...")


app = FastAPI(
    title=settings.project_name,
    description="CRUD and cost summary for user subscriptions",
    version=settings.api_version,
    lifespan=lifespan,
    debug=settings.debug,
)

# CORS configuration from Settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ============================================================================
# Exception Handlers
# ============================================================================

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query parameters are client errors (400)."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "ValidationError",
            "message": "Invalid request",
            "details": {"errors": jsonable_encoder(exc.errors())},
        },
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Handle validation errors."""
    return JSONResponse(
        status_code=400,
        content=exc.to_dict(),
    )


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError):
    """Handle not found errors."""
    return JSONResponse(
        status_code=404,
        content=exc.to_dict(),
    )


@app.exception_handler(SubscriptionAPIError)
async def general_error_handler(request: Request, exc: SubscriptionAPIError):
    """Handle store and all other application errors."""
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=500,
        content=exc.to_dict(),
    )


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "subscription-api"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": settings.project_name,
        "version": settings.api_version,
        "docs": "/docs",
    }


# ============================================================================
# Register routers
# ============================================================================

app.include_router(subscriptions.router, prefix="/api", tags=["Subscriptions"])
app.include_router(summary.router, prefix="/api", tags=["Summary"])


if __name__ == "__main__":
    uvicorn.run(
        "subscription_api.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
