"""Client for the external multimodal chat-completion API that returns images.

One request per call, no retries. Non-success statuses are classified into
rate-limit (429), payment-required (402) and generic failures.
"""

import logging

import httpx

from sitebuilder.core.exceptions import (
    ImageGenerationError,
    MissingCredentialsError,
    NoImageGeneratedError,
    PaymentRequiredError,
    RateLimitedError,
    UpstreamError,
)
from sitebuilder.services.prompt_enhancer import enhance_prompt

logger = logging.getLogger(__name__)

CREDENTIAL_NAME = "AI_GATEWAY_API_KEY"


def strip_data_uri(image_url: str) -> str:
    """Return the raw base64 payload of a ``data:...;base64,`` URI; other values unchanged.

    A data URI with nothing after the comma carries no image.
    """
    if image_url.startswith("data:"):
        _, _, payload = image_url.partition(",")
        if not payload:
            raise NoImageGeneratedError()
        return payload
    return image_url


def extract_image_url(data: dict) -> str | None:
    """Pull ``choices[0].message.images[0].image_url.url`` out of a completion body."""
    try:
        return data["choices"][0]["message"]["images"][0]["image_url"]["url"] or None
    except (KeyError, IndexError, TypeError):
        return None


class ImageGenerationClient:
    def __init__(
        self,
        api_key: str,
        url: str,
        model: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.url = url
        self.model = model
        self.timeout = timeout
        self._transport = transport

    def ensure_configured(self) -> None:
        if not self.api_key:
            raise MissingCredentialsError(CREDENTIAL_NAME)

    async def generate(self, prompt: str) -> str:
        """Send an already-enhanced prompt and return the image as raw base64."""
        self.ensure_configured()

        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "modalities": ["image", "text"],
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.post(
                    self.url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as exc:
            raise ImageGenerationError(f"Image generation API unreachable: {exc}") from exc

        if not resp.is_success:
            logger.error("Image generation API error: %d %s", resp.status_code, resp.text)
            if resp.status_code == 429:
                raise RateLimitedError()
            if resp.status_code == 402:
                raise PaymentRequiredError()
            raise UpstreamError(resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise ImageGenerationError("Image generation API returned invalid JSON") from exc
        logger.info("Image generation response received")

        image_url = extract_image_url(data)
        if not image_url:
            logger.error("No image in response: %s", data)
            raise NoImageGeneratedError()

        return strip_data_uri(image_url)


async def generate_image(
    client: ImageGenerationClient, prompt: str, language: str | None = None
) -> str:
    """Enhance the prompt and generate an image. Fails fast when no credential is set."""
    client.ensure_configured()
    logger.info("Generating image for prompt: %s", prompt)
    image_base64 = await client.generate(enhance_prompt(prompt, language))
    logger.info("Image generated successfully")
    return image_base64
