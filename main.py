"""
Meal Planner Backend Service - Main API Server
Ingredient consolidation, store organization and shopping list output
"""

from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog
import time
from typing import AsyncGenerator

from core.config import settings
from core.exceptions import InputDataError
from api.routes import api_router
from middleware.logging import LoggingMiddleware, get_request_id


def configure_logging() -> None:
    """Configure structlog for JSON (default) or console output"""
    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.LOG_FORMAT == "console"
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.LOG_LEVEL.upper())
        ),
        logger_factory=structlog.WriteLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(level=settings.LOG_LEVEL.upper())


configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    logger.info(
        "Starting Meal Planner Backend Service",
        environment=settings.ENVIRONMENT,
        ai_service_url=settings.AI_SERVICE_URL,
        ai_enhancement_enabled=settings.AI_ENHANCEMENT_ENABLED
    )
    yield
    logger.info("Meal Planner Backend Service shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Meal Planner Backend Service",
    description="Ingredient consolidation and shopping list services for household meal plans",
    version=settings.VERSION,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Process-Time", "X-Request-ID"]
)

app.add_middleware(LoggingMiddleware)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add response time header"""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(InputDataError)
async def input_data_exception_handler(request: Request, exc: InputDataError):
    logger.warning("Invalid ingredient data", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid ingredient data", "message": str(exc)}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(
        "Unhandled exception",
        exception=str(exc),
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred",
            "request_id": get_request_id() or request.headers.get("X-Request-ID")
        }
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Meal Planner Backend Service",
        "version": settings.VERSION,
        "status": "healthy",
        "environment": settings.ENVIRONMENT
    }


# Include API routes
app.include_router(api_router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development
    )
