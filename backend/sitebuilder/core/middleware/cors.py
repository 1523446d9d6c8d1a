"""CORS configuration for the API and the image generation function."""

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from sitebuilder.core.config import settings

# Sent on every response of the image generation function, preflight included.
FUNCTION_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

# Open to any origin; their OPTIONS route answers the preflight.
FUNCTION_PATHS = frozenset({"/api/v1/functions/generate-image"})


class APICORSMiddleware(CORSMiddleware):
    """Origin-restricted CORS for the API. Function paths pass through untouched."""

    def __init__(self, app: ASGIApp, exempt_paths: frozenset[str] = FUNCTION_PATHS, **kwargs):
        super().__init__(app, **kwargs)
        self.exempt_paths = exempt_paths

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"] in self.exempt_paths:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


def get_cors_config(origins: list[str] | None = None) -> dict:
    """Return CORS middleware kwargs for FastAPI."""
    return {
        "allow_origins": settings.allowed_origins_list if origins is None else origins,
        "allow_credentials": False,
        "allow_methods": ["GET", "POST", "PUT", "OPTIONS"],
        "allow_headers": [
            "Authorization",
            "Content-Type",
            "X-Request-Id",
            "X-Client-Info",
            "Apikey",
        ],
    }
