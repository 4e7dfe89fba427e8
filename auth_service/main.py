"""
Auth Service - FastAPI Application
User authentication in front of Supabase Auth for iLocal
"""

from fastapi import FastAPI, HTTPException, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from contextlib import asynccontextmanager

from shared.utils.logger import setup_logging

from auth_service.config import get_settings
from auth_service.routes import auth
from auth_service.utils.database import init_database, close_database
from auth_service.utils.dependencies import get_database
from auth_service.utils.errors import AuthServiceError

settings = get_settings()

setup_logging(settings.logging_config_path, settings.log_level, settings.log_format, settings.node_env)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    logger.info("Auth Service starting up...")
    settings.log_config()

    # Initialize database connections
    await init_database()

    logger.info("Auth Service startup complete")

    yield

    # Shutdown
    logger.info("Auth Service shutting down...")

    await close_database()


# Create FastAPI application
app = FastAPI(
    title="Auth Service",
    description="User authentication and session cookies for iLocal",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware; credentials are required for the session cookies
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_content(status_label: str, message: str, details: str = None) -> dict:
    content = {"status": status_label, "message": message}
    if details and settings.debug:
        content["details"] = details
    return content


@app.exception_handler(AuthServiceError)
async def auth_service_exception_handler(request: Request, exc: AuthServiceError):
    """Map service errors onto the JSON error contract"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.details})")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(exc.response_status, exc.message, exc.details)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Itemize request body violations as a 400"""
    errors = []
    for error in exc.errors():
        location = list(error.get("loc", ()))
        if location and location[0] == "body":
            location = location[1:]
        errors.append({
            "path": ".".join(str(part) for part in location),
            "message": error.get("msg"),
            "code": error.get("type")
        })

    if settings.is_development:
        logger.debug(f"[Validation Error] {errors}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "status": "failed",
            "message": "Invalid input",
            "errors": errors
        }
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Custom HTTP exception handler"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": exc.detail},
        headers=getattr(exc, "headers", None)
    )


# Starlette runs this handler in ServerErrorMiddleware, outside CORSMiddleware,
# so these responses carry no CORS headers. Expected failures raise
# AuthServiceError, which is handled inside the CORS layer.
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Anything unexpected becomes a generic 500"""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content("error", "Internal server error", str(exc))
    )


# Health check endpoint
@app.get("/health")
async def health_check():
    """Service health check"""
    return {
        "status": "healthy",
        "service": "auth-service",
        "version": settings.app_version
    }


# Database connection test endpoint
@app.get("/health/database")
async def database_health_check(db=Depends(get_database)):
    """Database connection health check"""
    try:
        await db.fetchval("SELECT 1")
        return {
            "status": "healthy",
            "database": "connected",
            "test_query": "passed"
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection failed"
        )


# Include routers
app.include_router(auth.router, prefix=settings.api_prefix, tags=["Authentication"])


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Auth Service",
        "version": settings.app_version,
        "description": "User authentication and session management",
        "docs": "/docs"
    }
