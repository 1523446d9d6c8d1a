"""Image generation function: prompt enhancement + external image API.

The body is parsed by hand so that malformed input is answered in the
function's own ``{error, success: false}`` envelope rather than as a 422.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from sitebuilder.core.dependencies import get_image_client
from sitebuilder.core.exceptions import ImageGenerationError
from sitebuilder.core.middleware.cors import FUNCTION_CORS_HEADERS
from sitebuilder.schemas.image import (
    EnhancePromptResponse,
    GenerateImageRequest,
    GenerateImageResponse,
    ImageErrorResponse,
)
from sitebuilder.services.image_generation import ImageGenerationClient, generate_image
from sitebuilder.services.prompt_enhancer import classify_prompt, enhance_prompt, resolve_language

logger = logging.getLogger(__name__)

router = APIRouter()


async def _parse_body(request: Request) -> GenerateImageRequest:
    try:
        return GenerateImageRequest.model_validate(await request.json())
    except ValueError as exc:
        raise ImageGenerationError(f"Invalid request body: {exc}") from exc


@router.options("/generate-image")
async def generate_image_preflight() -> Response:
    return Response(headers=FUNCTION_CORS_HEADERS)


@router.post(
    "/generate-image",
    response_model=GenerateImageResponse,
    responses={
        402: {"model": ImageErrorResponse},
        429: {"model": ImageErrorResponse},
        500: {"model": ImageErrorResponse},
    },
)
async def generate_image_function(
    request: Request,
    client: ImageGenerationClient = Depends(get_image_client),
) -> JSONResponse:
    body = await _parse_body(request)
    try:
        image_base64 = await generate_image(client, body.prompt, body.language)
    except ImageGenerationError:
        raise
    except Exception as exc:
        logger.exception("Unexpected error in generate-image function")
        raise ImageGenerationError(str(exc) or exc.__class__.__name__) from exc
    return JSONResponse(
        content=GenerateImageResponse(image_base64=image_base64).model_dump(by_alias=True),
        headers=FUNCTION_CORS_HEADERS,
    )


@router.post("/enhance-prompt", response_model=EnhancePromptResponse)
async def preview_enhanced_prompt(body: GenerateImageRequest) -> EnhancePromptResponse:
    """Show the style and final prompt without calling the image API."""
    return EnhancePromptResponse(
        style=classify_prompt(body.prompt).value,
        language=resolve_language(body.language),
        enhanced_prompt=enhance_prompt(body.prompt, body.language),
    )
