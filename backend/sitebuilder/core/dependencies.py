"""FastAPI dependency chain: JWT → owner id → owned restaurant → RLS context."""

import uuid
from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from sitebuilder.core.config import settings
from sitebuilder.core.security import decode_access_token, owner_id_from_claims
from sitebuilder.db.session import async_session_factory
from sitebuilder.models.restaurant import Restaurant
from sitebuilder.services.image_generation import ImageGenerationClient

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session. Commits on success, rolls back on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def set_rls_user(db: AsyncSession, user_id: uuid.UUID) -> None:
    """Expose the caller to the RLS policies for the rest of the transaction.

    Only PostgreSQL has the setting; other backends (the test SQLite engine)
    rely on the ownership check in ``get_owned_restaurant`` alone.
    """
    if db.bind.dialect.name != "postgresql":
        return
    await db.execute(
        text("SELECT set_config('app.current_user_id', :uid, true)"),
        {"uid": str(user_id)},
    )


async def get_current_owner_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> uuid.UUID:
    """Verify the Bearer token and return the caller's user id."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    try:
        claims = decode_access_token(credentials.credentials)
        return owner_id_from_claims(claims)
    except JWTError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {e}") from e


async def get_owned_restaurant(
    restaurant_id: uuid.UUID,
    owner_id: uuid.UUID = Depends(get_current_owner_id),
    db: AsyncSession = Depends(get_db),
) -> tuple[AsyncSession, Restaurant]:
    """Resolve the path's restaurant and check the caller owns it.

    Mirrors the RLS policies on restaurant_websites: only the restaurant's
    owner may read or write its website row.
    """
    await set_rls_user(db, owner_id)

    result = await db.execute(select(Restaurant).where(Restaurant.id == restaurant_id))
    restaurant = result.scalar_one_or_none()
    if restaurant is None:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    if restaurant.owner_id != owner_id:
        raise HTTPException(status_code=403, detail="Not the owner of this restaurant")

    return db, restaurant


def get_image_client() -> ImageGenerationClient:
    """Image generation client built from settings. Overridden in tests."""
    return ImageGenerationClient(
        api_key=settings.AI_GATEWAY_API_KEY,
        url=settings.AI_GATEWAY_URL,
        model=settings.IMAGE_MODEL,
        timeout=settings.IMAGE_REQUEST_TIMEOUT,
    )
