"""Website config store: one configuration row per restaurant.

The store keeps the current config in memory. ``load()`` never fails on a
missing row: it hands back the default config with ``id=None`` and nothing
is written until the first ``save()``. Saves update by id once the id is
known and insert otherwise. There is no version check; the last writer wins.
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sitebuilder.core.exceptions import ProblemDetailError
from sitebuilder.models.restaurant_website import RestaurantWebsite
from sitebuilder.schemas.website_config import WebsiteConfigFields, WebsiteConfigResponse
from sitebuilder.services.subdomain import generate_website_subdomain

logger = logging.getLogger(__name__)


def default_config(restaurant_id: uuid.UUID) -> WebsiteConfigResponse:
    return WebsiteConfigResponse(restaurant_id=restaurant_id)


class WebsiteConfigStore:
    def __init__(self, db: AsyncSession, restaurant_id: uuid.UUID):
        self.db = db
        self.restaurant_id = restaurant_id
        self.config: WebsiteConfigResponse | None = None

    async def load(self) -> WebsiteConfigResponse:
        try:
            result = await self.db.execute(
                select(RestaurantWebsite).where(
                    RestaurantWebsite.restaurant_id == self.restaurant_id
                )
            )
            row = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.exception("Error loading website config for %s", self.restaurant_id)
            raise ProblemDetailError(
                status=500,
                title="Load failed",
                detail="Could not load the website configuration",
            ) from exc

        if row is None:
            self.config = default_config(self.restaurant_id)
        else:
            self.config = WebsiteConfigResponse.model_validate(row)
        return self.config

    async def save(self, updates: dict) -> WebsiteConfigResponse:
        """Apply a partial update. Inserts the defaults merged with it on first save."""
        if self.config is None:
            await self.load()

        try:
            if self.config.id is not None:
                row = await self._update(self.config.id, updates)
            else:
                row = await self._insert(updates)
        except IntegrityError as exc:
            await self.db.rollback()
            logger.warning(
                "Website config save conflict for %s: %s", self.restaurant_id, exc.orig
            )
            raise ProblemDetailError(
                status=409,
                title="Conflict",
                detail="Subdomain or custom domain already taken",
            ) from exc
        except SQLAlchemyError as exc:
            logger.exception("Error saving website config for %s", self.restaurant_id)
            raise ProblemDetailError(
                status=500,
                title="Save failed",
                detail="Could not save the website configuration",
            ) from exc

        self.config = WebsiteConfigResponse.model_validate(row)
        logger.info(
            "Saved website config %s for restaurant %s", self.config.id, self.restaurant_id
        )
        return self.config

    async def _insert(self, updates: dict) -> RestaurantWebsite:
        values = {**WebsiteConfigFields().model_dump(), **updates}
        row = RestaurantWebsite(restaurant_id=self.restaurant_id, **values)
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return row

    async def _update(self, website_id: uuid.UUID, updates: dict) -> RestaurantWebsite:
        result = await self.db.execute(
            select(RestaurantWebsite).where(RestaurantWebsite.id == website_id)
        )
        row = result.scalar_one()
        for key, value in updates.items():
            setattr(row, key, value)
        await self.db.flush()
        await self.db.refresh(row)
        return row

    async def generate_subdomain(self, restaurant_name: str) -> str:
        return await generate_website_subdomain(self.db, restaurant_name)

    async def publish(self, restaurant_name: str | None = None) -> WebsiteConfigResponse:
        """Publish the site. Assigns a subdomain first when a name is given and none is set."""
        if self.config is None:
            await self.load()

        updates: dict = {"is_published": True}
        if restaurant_name and not self.config.subdomain:
            updates["subdomain"] = await self.generate_subdomain(restaurant_name)
        return await self.save(updates)

    async def unpublish(self) -> WebsiteConfigResponse:
        return await self.save({"is_published": False})
