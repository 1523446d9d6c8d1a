"""Service tests: WebsiteConfigStore load/save/publish semantics."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sitebuilder.core.exceptions import ProblemDetailError
from sitebuilder.models.restaurant import Restaurant
from sitebuilder.models.restaurant_website import RestaurantWebsite
from sitebuilder.services.website_store import WebsiteConfigStore
from tests.conftest import create_restaurant, create_website


async def _row_count(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(RestaurantWebsite))).scalar_one()


async def test_load_without_row_returns_unsaved_defaults(db: AsyncSession, restaurant: Restaurant):
    store = WebsiteConfigStore(db, restaurant.id)

    config = await store.load()

    assert config.id is None
    assert config.restaurant_id == restaurant.id
    assert config.theme_color == "#FF6B35"
    assert config.hero_cta_text == "Réserver une table"
    assert config.gallery_images == []
    assert config.is_published is False
    assert await _row_count(db) == 0


async def test_first_save_inserts_and_returns_id(db: AsyncSession, restaurant: Restaurant):
    store = WebsiteConfigStore(db, restaurant.id)
    await store.load()

    config = await store.save({"hero_title": "Bienvenue"})

    assert config.id is not None
    assert config.hero_title == "Bienvenue"
    assert config.about_title == "À propos"
    assert await _row_count(db) == 1


async def test_save_with_known_id_updates_and_preserves_id(
    db: AsyncSession, restaurant: Restaurant
):
    store = WebsiteConfigStore(db, restaurant.id)
    first = await store.save({"hero_title": "Bienvenue", "theme_color": "#000000"})

    second = await store.save({"hero_title": "Welcome"})

    assert second.id == first.id
    assert second.hero_title == "Welcome"
    assert second.theme_color == "#000000"
    assert await _row_count(db) == 1


async def test_load_existing_row(db: AsyncSession, restaurant: Restaurant):
    website = await create_website(db, restaurant, hero_title="Chez nous")

    config = await WebsiteConfigStore(db, restaurant.id).load()

    assert config.id == website.id
    assert config.hero_title == "Chez nous"


async def test_publish_and_unpublish(db: AsyncSession, restaurant: Restaurant):
    store = WebsiteConfigStore(db, restaurant.id)
    await store.save({"subdomain": "le-petit-bistro"})

    published = await store.publish()
    assert published.is_published is True
    assert published.subdomain == "le-petit-bistro"

    unpublished = await store.unpublish()
    assert unpublished.is_published is False
    assert unpublished.id == published.id


async def test_publish_assigns_subdomain_when_missing(db: AsyncSession, restaurant: Restaurant):
    store = WebsiteConfigStore(db, restaurant.id)

    config = await store.publish(restaurant.name)

    assert config.is_published is True
    assert config.subdomain == "le-petit-bistro"
    assert config.site_url == "https://le-petit-bistro.sites.test"


async def test_duplicate_subdomain_is_conflict(db: AsyncSession, restaurant: Restaurant):
    other = await create_restaurant(db, name="Autre")
    await create_website(db, other, subdomain="taken")
    store = WebsiteConfigStore(db, restaurant.id)

    with pytest.raises(ProblemDetailError) as exc_info:
        await store.save({"subdomain": "taken"})

    assert exc_info.value.status == 409
