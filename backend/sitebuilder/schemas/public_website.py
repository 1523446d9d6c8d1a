"""Public-facing website record: config joined with the restaurant's public profile."""

import uuid

from pydantic import BaseModel, Field


class PublicRestaurantData(BaseModel):
    """Restaurant fields exposed on public sites (no owner_id, no is_active)."""

    id: uuid.UUID
    name: str
    description: str | None = None
    description_fr: str | None = None
    description_en: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    cuisine_type: list[str] | None = None
    price_range: str | None = None
    logo_url: str | None = None
    cover_image_url: str | None = None
    opening_hours: dict | None = None
    reservations_enabled: bool = False
    instagram_url: str | None = None
    facebook_url: str | None = None
    tiktok_url: str | None = None
    dietary_restrictions: list[str] | None = None
    allergens: list[str] | None = None
    restaurant_specialties: list[str] | None = None
    service_types: list[str] | None = None
    parking: str | None = None
    dress_code: str | None = None

    model_config = {"from_attributes": True}


class PublicWebsiteResponse(BaseModel):
    website_config: dict = Field(default_factory=dict)
    restaurant_data: dict = Field(default_factory=dict)
