"""Encryption Client - FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from services.encryption_client.app.api import client_router
from services.encryption_client.app.api.deps import cleanup_dependencies
from services.encryption_client.app.config import get_encryption_api_settings, get_settings
from services.encryption_client.app.core.schemas import EncryptionResponse
from services.encryption_client.app.middleware import CorrelationMiddleware
from shared.utils.logging import configure_logging, get_logger
from shared.utils.metrics import MetricsMiddleware, metrics_endpoint

settings = get_settings()

configure_logging(
    service_name=settings.service_name,
    log_level=settings.log_level,
    json_format=settings.log_json,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    encryption_api = get_encryption_api_settings()
    logger.info(
        "starting_service",
        service=settings.service_name,
        environment=settings.environment,
        encryption_api=encryption_api.base_url,
        connect_timeout_ms=encryption_api.connect_timeout,
        read_timeout_ms=encryption_api.read_timeout,
    )

    yield

    logger.info("shutting_down_service")
    await cleanup_dependencies()
    logger.info("service_shutdown_complete")


app = FastAPI(
    title="Encryption Client",
    description="REST relay for the upstream encryption service",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationMiddleware)
app.add_middleware(MetricsMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=500,
        content=EncryptionResponse.error("An internal error occurred").model_dump(
            by_alias=True, exclude_none=True
        ),
    )


app.include_router(client_router)

app.add_route("/metrics", metrics_endpoint)


@app.get("/")
async def root():
    """Root endpoint with service info."""
    return {
        "service": settings.service_name,
        "version": "0.1.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.encryption_client.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
