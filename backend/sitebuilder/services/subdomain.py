"""Subdomain slugs for restaurant websites.

The slug is the restaurant name transliterated to ASCII, lowercased, with
every run of other characters collapsed to a single hyphen. Taken slugs get
a numeric suffix: ``le-bistro``, ``le-bistro-1``, ``le-bistro-2``...
"""

from slugify import slugify as _slugify
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sitebuilder.models.restaurant_website import RestaurantWebsite

FALLBACK_SLUG = "restaurant"
MAX_SLUG_LENGTH = 55  # leaves room for a "-NNNNNNN" suffix within 63 chars


def slugify(name: str) -> str:
    return _slugify(name, max_length=MAX_SLUG_LENGTH) or FALLBACK_SLUG


async def generate_website_subdomain(db: AsyncSession, restaurant_name: str) -> str:
    """Return the first free slug for the name.

    On PostgreSQL the scan runs in the ``generate_website_subdomain`` SQL
    function (SECURITY DEFINER), since RLS hides other owners' unpublished
    rows from the caller. The unique constraint on
    restaurant_websites.subdomain stays the final arbiter: two concurrent
    callers can be handed the same slug, and the second save answers 409.
    """
    base_slug = slugify(restaurant_name)

    if db.bind.dialect.name == "postgresql":
        result = await db.execute(select(func.generate_website_subdomain(base_slug)))
        return result.scalar_one()

    result = await db.execute(
        select(RestaurantWebsite.subdomain).where(
            RestaurantWebsite.subdomain.like(f"{base_slug}%")
        )
    )
    taken = set(result.scalars().all())

    final_slug = base_slug
    counter = 0
    while final_slug in taken:
        counter += 1
        final_slug = f"{base_slug}-{counter}"
    return final_slug
