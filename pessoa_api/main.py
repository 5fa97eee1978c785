"""
FastAPI application for Pessoa record management.

Provides the REST endpoints for creating, reading, updating and soft-deleting
pessoas, backed by OpenSearch (or an in-memory store).
"""

import logging
from typing import Dict, Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from pessoa_api import header_util
from pessoa_api.config import Config, index_name, opensearch_client
from pessoa_api.exceptions import BadRequestAlertError, NotFoundError
from pessoa_api.routers import pessoas

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Pessoa API",
    description="REST API for managing pessoa records",
    version="0.1.0",
    root_path=Config.API_ROOT_PATH,
)

app.include_router(pessoas.router, prefix="/api")


@app.exception_handler(BadRequestAlertError)
async def bad_request_alert_handler(request: Request, exc: BadRequestAlertError) -> JSONResponse:
    logger.warning("Bad request on %s %s: %s (%s)", request.method, request.url.path, exc.message, exc.error_key)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=exc.to_problem(),
        headers=header_util.failure_alert(exc.entity_name, exc.error_key),
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """
    Health check endpoint to verify API and storage connectivity.

    Returns:
        dict: Status information
    """
    if Config.STORAGE_BACKEND == "memory":
        return {"status": "healthy", "storage": "memory"}

    try:
        # Ping OpenSearch to verify connectivity
        if opensearch_client.ping():
            return {
                "status": "healthy",
                "opensearch": "connected",
                "index": index_name,
            }
        else:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "unhealthy",
                    "opensearch": "disconnected",
                },
            )
    except Exception as e:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "error": str(e),
            },
        )


@app.get("/")
async def root() -> Dict[str, Any]:
    """
    Root endpoint with API information.

    Returns:
        dict: API metadata
    """
    return {
        "name": "Pessoa API",
        "version": "0.1.0",
        "storage": Config.STORAGE_BACKEND,
        "docs": f"{Config.API_ROOT_PATH}/docs",
        "health": f"{Config.API_ROOT_PATH}/health",
    }
