"""JWT verification for tokens issued by the external identity provider (HS256)."""

import time
import uuid

from jose import JWTError, jwt

from sitebuilder.core.config import settings


def decode_access_token(token: str) -> dict:
    """Decode and verify an access token. Returns the claims dict."""
    return jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=["HS256"],
        audience=settings.JWT_AUDIENCE,
    )


def owner_id_from_claims(claims: dict) -> uuid.UUID:
    """The `sub` claim is the caller's user id; restaurants reference it as owner_id."""
    sub = claims.get("sub")
    if not sub:
        raise JWTError("Token missing sub claim")
    try:
        return uuid.UUID(sub)
    except ValueError as exc:
        raise JWTError("sub claim is not a UUID") from exc


def create_access_token(
    sub: str,
    email: str = "owner@example.com",
    expires_in: int = 900,
) -> str:
    """Create a token the way the identity provider does (local dev and tests)."""
    payload = {
        "sub": sub,
        "email": email,
        "aud": settings.JWT_AUDIENCE,
        "role": "authenticated",
        "iat": int(time.time()),
        "exp": int(time.time()) + expires_in,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm="HS256")
