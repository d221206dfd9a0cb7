from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from pydantic import ValidationError as PydanticValidationError
from slowapi.errors import RateLimitExceeded

from ministry_hub.core.config import settings
from ministry_hub.core.database import close_db
from ministry_hub.core.exceptions import MinistryHubError, error_response
from ministry_hub.core.logging_config import logger
from ministry_hub.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    RequestSizeLimitMiddleware,
)
from ministry_hub.core.rate_limiter import limiter, rate_limit_exceeded_handler
from ministry_hub.api.v1.router import api_router


async def validate_critical_config():
    """Validate critical configuration at startup - fail fast if missing"""
    errors = []
    warnings = []

    if not settings.DATABASE_URL:
        errors.append("DATABASE_URL is not set")
    if not settings.SECRET_KEY or settings.SECRET_KEY == "CHANGE_ME":
        errors.append("SECRET_KEY is not set or using default value")
    if not settings.JWT_SECRET_KEY or settings.JWT_SECRET_KEY == "CHANGE_ME":
        errors.append("JWT_SECRET_KEY is not set or using default value")

    # Warnings: App can function but some features may not work
    if not settings.ai_enabled:
        warnings.append("ANTHROPIC_API_KEY not set - journal reflections disabled, lead scoring uses heuristics")
    if not settings.GIVING_WEBHOOK_SECRET:
        warnings.append("GIVING_WEBHOOK_SECRET not set - donation webhooks will be rejected")
    if not settings.REDIS_URL:
        warnings.append("REDIS_URL not set - rate limits are per process")

    if errors:
        for err in errors:
            logger.critical(f"[Startup] CRITICAL: {err}")
        raise RuntimeError(f"Missing critical configuration: {', '.join(errors)}")

    for warn in warnings:
        logger.warning(f"[Startup] WARNING: {warn}")

    logger.info("[Startup] Critical configuration validated")
    return True


async def ensure_database_ready():
    """Create tables when the members table is missing"""
    from sqlalchemy import text
    from ministry_hub.core.database import get_session_local, init_db

    try:
        session_factory = get_session_local()
        async with session_factory() as session:
            try:
                await session.execute(text("SELECT 1 FROM members LIMIT 1"))
                logger.info("[Startup] Database tables already exist")
                return True
            except Exception:
                logger.warning("[Startup] Database tables not found, creating...")

        await init_db()
        logger.info("[Startup] Database tables created successfully")
        return True

    except Exception as e:
        logger.error(f"[Startup] Failed to ensure database ready: {e}")
        return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"API Version: {settings.API_VERSION}")
    logger.info("=" * 60)

    await validate_critical_config()

    db_ready = await ensure_database_ready()
    if not db_ready:
        logger.warning("[Startup] Database not ready - some features may fail")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_db()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Membership, discipleship and engagement platform for a church ministry",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False
)

# Add rate limiter state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Add middleware (order matters - last added runs first)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_REQUEST_SIZE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)


# Exception handlers
@app.exception_handler(MinistryHubError)
async def ministry_hub_exception_handler(request: Request, exc: MinistryHubError):
    if exc.status_code >= 500:
        logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
    else:
        logger.warning(
            f"{type(exc).__name__}: {exc.message}",
            extra={"event_type": "domain_error", "error_code": exc.code, "http_path": request.url.path}
        )
    return JSONResponse(status_code=exc.status_code, content=error_response(exc))


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_handler(request: Request, exc: PydanticValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(include_url=False, include_context=False)}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "message": str(exc) if settings.DEBUG else "An error occurred"
        }
    )


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": "1.0.0",
        "docs": "/docs"
    }


# Include API router
app.include_router(api_router, prefix=f"/api/{settings.API_VERSION}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "ministry_hub.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )
