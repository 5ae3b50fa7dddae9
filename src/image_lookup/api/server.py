"""
HTTP API Server for image lookup.

Thin boundary over ImageLookupService:

    GET /api/searchImage?q=<keywords>
        200 {"imageUrl": "..."}
        400 {"error": "...", "kind": "InputValidation"}
        404 {"error": "...", "kind": "NoResults"}
        500 {"error": "Error fetching image: ...", "kind": "..."}
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from image_lookup import __version__
from image_lookup.application.image_lookup import ImageLookupService
from image_lookup.shared.config import LookupConfig, get_config
from image_lookup.shared.exceptions import ImageLookupError, InputValidationError

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[str, int] = {
    "InputValidation": 400,
    "NoResults": 404,
}


# Pydantic models for API responses
class ImageUrlResponse(BaseModel):
    """Successful lookup."""
    imageUrl: str


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str
    kind: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


def get_lookup_service() -> ImageLookupService:
    """Dependency: a lookup service built from the current configuration."""
    return ImageLookupService(get_config())


def error_response(error: ImageLookupError) -> JSONResponse:
    """Flatten a pipeline error into one message with a status code."""
    status = STATUS_BY_KIND.get(error.kind, 500)
    if status == 500:
        message = f"Error fetching image: {error}"
        if error.cause and error.cause not in message:
            message = f"{message} ({error.cause})"
    else:
        message = str(error)
    return JSONResponse(
        status_code=status,
        content=ErrorResponse(error=message, kind=error.kind).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    config = get_config()
    logger.info(f"Image lookup API ready (provider: {config.base_url}, timeout: {config.timeout}s)")
    yield
    logger.info("Image lookup API shutting down")


def create_api_server() -> FastAPI:
    """
    Create the FastAPI server.

    Returns:
        Configured FastAPI instance.
    """
    app = FastAPI(
        title="Image Lookup API",
        description="Find a representative image URL for free-text keywords.",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__)

    @app.get(
        "/api/searchImage",
        response_model=ImageUrlResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Missing or malformed q"},
            404: {"model": ErrorResponse, "description": "No images found"},
            500: {"model": ErrorResponse, "description": "Upstream or parse failure"},
        },
    )
    async def search_image(
        request: Request,
        q: str | None = Query(default=None, description="Search keywords"),
        service: ImageLookupService = Depends(get_lookup_service),
    ):
        """Look up the canonical image URL for ``q``."""
        try:
            if len(request.query_params.getlist("q")) > 1:
                raise InputValidationError(value=request.query_params.getlist("q"))
            image_url = await service.lookup(q)
        except ImageLookupError as e:
            logger.warning(f"searchImage q={q!r} failed: {e.kind}: {e}")
            return error_response(e)
        return ImageUrlResponse(imageUrl=image_url)

    return app


# Create the app instance
app = create_api_server()


def run_api_server(config: LookupConfig | None = None) -> None:
    """
    Run the HTTP API server.

    Args:
        config: Host/port and pipeline settings (default: from environment)
    """
    import uvicorn

    if config is None:
        config = get_config()
    else:
        app.dependency_overrides[get_lookup_service] = lambda: ImageLookupService(config)
    logger.info(f"Starting HTTP API server on {config.api_host}:{config.api_port}")
    uvicorn.run(app, host=config.api_host, port=config.api_port, log_level="info")
