"""
API Gateway for the todo API service.

This module provides the FastAPI application: it wires the stores and
services, registers the routers, and maps service errors to HTTP responses.
"""

import logging
import time
from datetime import datetime
from typing import Dict, Optional, Type

import psutil
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from todoapi.account_manager.manager import AccountService, CredentialService
from todoapi.api_gateway.accounts import api_keys_router, auth_router
from todoapi.api_gateway.auth import build_api_key_scheme
from todoapi.api_gateway.models import SystemHealth
from todoapi.api_gateway.todos import router as todos_router
from todoapi.config import Settings, settings as default_settings
from todoapi.storage import Stores, build_stores
from todoapi.todo_manager.manager import TaskResourceManager
from todoapi.utils.error_handling import (
    AccountNotFound,
    IntegrityFault,
    InvalidCredential,
    IssuanceLimitReached,
    KeyNotFound,
    StorageError,
    TaskNotFound,
    TodoAPIError,
    UsernameTaken,
    catch_and_log
)


# Set up logging
logger = logging.getLogger(__name__)

# Gateway start time (for uptime calculation)
START_TIME = datetime.now()

GENERIC_ERROR_MESSAGE = "Something went wrong"

# Response status for each service error kind
ERROR_STATUS_CODES: Dict[Type[TodoAPIError], int] = {
    AccountNotFound: status.HTTP_404_NOT_FOUND,
    KeyNotFound: status.HTTP_404_NOT_FOUND,
    TaskNotFound: status.HTTP_404_NOT_FOUND,
    InvalidCredential: status.HTTP_400_BAD_REQUEST,
    IssuanceLimitReached: status.HTTP_400_BAD_REQUEST,
    UsernameTaken: status.HTTP_409_CONFLICT,
    IntegrityFault: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and responses."""

    async def dispatch(self, request: Request, call_next):
        """
        Handle a request, logging details.

        Args:
            request: The incoming request
            call_next: The next middleware/route handler

        Returns:
            The response
        """
        start_time = time.time()

        logger.info(f"Request: {request.method} {request.url.path}")

        try:
            response = await call_next(request)

            duration_ms = (time.time() - start_time) * 1000
            logger.info(f"Response: {response.status_code} - {duration_ms:.2f}ms")

            # Add timing header
            response.headers["X-Process-Time"] = f"{duration_ms:.2f}ms"

            return response
        except Exception as e:
            logger.exception(f"Error processing request {request.method} {request.url.path}: {e}")

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": GENERIC_ERROR_MESSAGE}
            )


async def service_error_handler(request: Request, exc: TodoAPIError) -> JSONResponse:
    """Translate a service error into its HTTP response."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_class, error_status in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_class):
            status_code = error_status
            break

    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{exc.__class__.__name__} in {exc.component}: {exc.message} {exc.details}")
        detail = GENERIC_ERROR_MESSAGE
    else:
        logger.info(f"{exc.__class__.__name__} in {exc.component}: {exc.message}")
        detail = exc.message

    return JSONResponse(status_code=status_code, content={"detail": detail})


@catch_and_log(component="api_gateway", default_return={})
def get_resource_utilization() -> Dict[str, float]:
    """Sample host CPU, memory and disk usage."""
    memory = psutil.virtual_memory()
    disk = psutil.disk_usage('/')

    return {
        "cpu_percent": psutil.cpu_percent(interval=0.1),
        "memory_percent": memory.percent,
        "memory_used_mb": memory.used / (1024 * 1024),
        "disk_percent": disk.percent,
        "disk_free_gb": disk.free / (1024 * 1024 * 1024)
    }


def create_app(app_settings: Optional[Settings] = None, stores: Optional[Stores] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        app_settings: Settings to use (default: global settings)
        stores: Stores to use (default: built from app_settings.storage_backend)

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or default_settings
    if stores is None:
        stores = build_stores(app_settings.storage_backend, app_settings.data_dir)

    app = FastAPI(
        title="Todo API",
        description="Per-user todo items behind issued API keys",
        version="1.0.0"
    )

    # Wire services
    app.state.settings = app_settings
    app.state.stores = stores
    app.state.api_key_scheme = build_api_key_scheme(app_settings.api_key_header)
    app.state.account_service = AccountService(stores.accounts)
    app.state.credential_service = CredentialService(stores.accounts, stores.api_keys, app_settings)
    app.state.task_manager = TaskResourceManager(stores.tasks)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(TodoAPIError, service_error_handler)

    app.include_router(auth_router)
    app.include_router(api_keys_router)
    app.include_router(todos_router)

    @app.get("/health", response_model=SystemHealth, tags=["health"])
    async def get_system_health():
        """
        Get system health status.

        Returns:
            System health status
        """
        uptime_seconds = (datetime.now() - START_TIME).total_seconds()
        components = {
            "api_gateway": {"status": "healthy", "uptime_seconds": uptime_seconds},
            "storage": {"status": "healthy", "backend": app_settings.storage_backend}
        }

        resource_utilization = get_resource_utilization()

        health_status = "healthy"
        if (resource_utilization.get("cpu_percent", 0) > 90
                or resource_utilization.get("memory_percent", 0) > 90
                or resource_utilization.get("disk_percent", 0) > 95):
            health_status = "degraded"

        return SystemHealth(
            status=health_status,
            uptime_seconds=uptime_seconds,
            components=components,
            resource_utilization=resource_utilization
        )

    @app.on_event("startup")
    async def startup_event():
        """Run when the API gateway starts."""
        logger.info(
            f"API Gateway starting up (storage={app_settings.storage_backend}, "
            f"api_key_limit={app_settings.api_key_limit})"
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        """Run when the API gateway shuts down."""
        logger.info("API Gateway shutting down")

    return app


# Create FastAPI application
app = create_app()


def run_gateway(host: Optional[str] = None, port: Optional[int] = None, reload: Optional[bool] = None):
    """Run the API gateway with Uvicorn."""
    import uvicorn
    uvicorn.run(
        "todoapi.api_gateway.gateway:app",
        host=host or default_settings.api_gateway_host,
        port=port or default_settings.api_gateway_port,
        reload=default_settings.debug if reload is None else reload
    )


if __name__ == "__main__":
    run_gateway()
