"""Image generation function request/response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class GenerateImageRequest(BaseModel):
    prompt: str = Field(..., min_length=1)
    language: str | None = None


class GenerateImageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_base64: str = Field(..., alias="imageBase64")
    success: bool = True


class ImageErrorResponse(BaseModel):
    error: str
    success: bool = False


class EnhancePromptResponse(BaseModel):
    style: str
    language: str
    enhanced_prompt: str
