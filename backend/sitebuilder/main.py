"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sitebuilder import __version__
from sitebuilder.api.v1.public_website import site_router
from sitebuilder.api.v1.router import api_v1_router
from sitebuilder.core.config import settings
from sitebuilder.core.exceptions import (
    ImageGenerationError,
    ProblemDetailError,
    http_exception_handler,
    image_generation_error_handler,
    problem_detail_handler,
    validation_exception_handler,
)
from sitebuilder.core.middleware.cors import APICORSMiddleware, get_cors_config
from sitebuilder.core.middleware.request_id import RequestIdMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="Restaurant Website Builder API",
    version=__version__,
    docs_url="/docs",
    openapi_url="/openapi.json",
)

# Middleware (last added = first executed)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(APICORSMiddleware, **get_cors_config())

# Exception handlers
app.add_exception_handler(ProblemDetailError, problem_detail_handler)
app.add_exception_handler(ImageGenerationError, image_generation_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Routes
app.include_router(api_v1_router, prefix="/api/v1")
app.include_router(site_router, prefix="/sites", tags=["sites"])


def main() -> None:
    """Run the API with uvicorn (``sitebuilder`` console script)."""
    import uvicorn

    uvicorn.run("sitebuilder.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
