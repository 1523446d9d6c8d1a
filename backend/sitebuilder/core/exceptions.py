"""Error handling.

Config and public APIs answer with RFC 7807 Problem Details. The image
generation function keeps its own ``{error, success: false}`` envelope.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sitebuilder.core.middleware.cors import FUNCTION_CORS_HEADERS

logger = logging.getLogger(__name__)


class ProblemDetailError(Exception):
    """Raise for RFC 7807 problem+json responses."""

    def __init__(
        self,
        status: int,
        title: str,
        detail: str,
        error_type: str | None = None,
    ):
        super().__init__(detail)
        self.status = status
        self.title = title
        self.detail = detail
        self.error_type = error_type or "about:blank"


class ImageGenerationError(Exception):
    """Failure of the image generation function. Rendered as ``{error, success: false}``."""

    status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingCredentialsError(ImageGenerationError):
    def __init__(self, name: str):
        super().__init__(f"{name} is not configured")


class RateLimitedError(ImageGenerationError):
    status = 429

    def __init__(self):
        super().__init__("Rate limit exceeded, please try again later.")


class PaymentRequiredError(ImageGenerationError):
    status = 402

    def __init__(self):
        super().__init__("Payment required, please add credits.")


class UpstreamError(ImageGenerationError):
    def __init__(self, status_code: int):
        super().__init__(f"Image generation API error: {status_code}")
        self.status_code = status_code


class NoImageGeneratedError(ImageGenerationError):
    def __init__(self):
        super().__init__("No image generated")


async def problem_detail_handler(request: Request, exc: ProblemDetailError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status,
        content={
            "type": exc.error_type,
            "title": exc.title,
            "status": exc.status,
            "detail": exc.detail,
            "instance": str(request.url.path),
        },
        media_type="application/problem+json",
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "type": "about:blank",
            "title": exc.detail if isinstance(exc.detail, str) else "Error",
            "status": exc.status_code,
            "detail": exc.detail,
            "instance": str(request.url.path),
        },
        media_type="application/problem+json",
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "type": "about:blank",
            "title": "Validation Error",
            "status": 422,
            "detail": jsonable_errors(exc),
            "instance": str(request.url.path),
        },
        media_type="application/problem+json",
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # ctx may carry the raw ValueError raised by a field validator
    errors = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        errors.append(err)
    return errors


async def image_generation_error_handler(
    request: Request, exc: ImageGenerationError
) -> JSONResponse:
    logger.error("Error in generate-image function: %s", exc.message)
    return JSONResponse(
        status_code=exc.status,
        content={"error": exc.message, "success": False},
        headers=FUNCTION_CORS_HEADERS,
    )
