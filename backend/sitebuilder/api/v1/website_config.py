"""Website config endpoints for restaurant owners (GET / PUT / publish / unpublish)."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sitebuilder.core.dependencies import get_current_owner_id, get_db, get_owned_restaurant
from sitebuilder.models.restaurant import Restaurant
from sitebuilder.schemas.website_config import (
    SubdomainRequest,
    SubdomainResponse,
    WebsiteConfigResponse,
    WebsiteConfigUpdate,
)
from sitebuilder.services.subdomain import generate_website_subdomain
from sitebuilder.services.website_store import WebsiteConfigStore

router = APIRouter()
subdomain_router = APIRouter()


async def _loaded_store(db: AsyncSession, restaurant: Restaurant) -> WebsiteConfigStore:
    store = WebsiteConfigStore(db, restaurant.id)
    await store.load()
    return store


@router.get("", response_model=WebsiteConfigResponse)
async def get_website_config(
    db_restaurant: tuple[AsyncSession, Restaurant] = Depends(get_owned_restaurant),
):
    """Current config, or the unsaved defaults (id null) when the site was never saved."""
    store = await _loaded_store(*db_restaurant)
    return store.config


@router.put("", response_model=WebsiteConfigResponse)
async def save_website_config(
    body: WebsiteConfigUpdate,
    db_restaurant: tuple[AsyncSession, Restaurant] = Depends(get_owned_restaurant),
):
    """Create or update the website config (patch semantics, last writer wins)."""
    store = await _loaded_store(*db_restaurant)
    return await store.save(body.changes())


@router.post("/publish", response_model=WebsiteConfigResponse)
async def publish_website(
    db_restaurant: tuple[AsyncSession, Restaurant] = Depends(get_owned_restaurant),
):
    """Publish the site, assigning a subdomain from the restaurant name if none is set."""
    _db, restaurant = db_restaurant
    store = await _loaded_store(*db_restaurant)
    return await store.publish(restaurant.name)


@router.post("/unpublish", response_model=WebsiteConfigResponse)
async def unpublish_website(
    db_restaurant: tuple[AsyncSession, Restaurant] = Depends(get_owned_restaurant),
):
    store = await _loaded_store(*db_restaurant)
    return await store.unpublish()


@subdomain_router.post("/subdomain", response_model=SubdomainResponse)
async def generate_subdomain(
    body: SubdomainRequest,
    _owner_id: uuid.UUID = Depends(get_current_owner_id),
    db: AsyncSession = Depends(get_db),
):
    """Suggest a free subdomain for a restaurant name. Nothing is reserved."""
    return SubdomainResponse(subdomain=await generate_website_subdomain(db, body.name))
