"""Website config request/response schemas.

``WebsiteConfigFields`` is the single source of the per-field defaults: the
store builds the unsaved default config from it and inserts it merged with
the caller's partial update on first save.
"""

import re
import uuid
from datetime import datetime
from typing import Literal

from pydantic import (
    BaseModel,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    computed_field,
    field_validator,
)

from sitebuilder.core.config import settings

_HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")
DOMAIN_PATTERN = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?:\.[a-z0-9-]{1,63})+$")

LogoPosition = Literal["left", "center", "right"]
MenuDisplayStyle = Literal["grid", "list", "carousel"]


def _split_lines(v):
    """Gallery images arrive from the builder form as one URL per line."""
    if isinstance(v, str):
        return [line.strip() for line in v.splitlines() if line.strip()]
    return v


def _split_commas(v):
    if isinstance(v, str):
        return [k.strip() for k in v.split(",") if k.strip()]
    return v


def _check_hex_color(v: str | None) -> str | None:
    if v is not None and not _HEX_COLOR_RE.match(v):
        raise ValueError("Must be a hex color in #RRGGBB format")
    return v


def _check_subdomain(v: str | None) -> str | None:
    if v is not None and not SUBDOMAIN_PATTERN.match(v):
        raise ValueError(
            "Subdomain must be 1-63 chars, lowercase alphanumeric with hyphens, "
            "cannot start or end with a hyphen"
        )
    return v


def _normalize_domain(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip().lower()
    if not v:
        return None
    if not DOMAIN_PATTERN.match(v):
        raise ValueError("Custom domain must be a bare host name, e.g. www.example.com")
    return v


_HTTP_URL = TypeAdapter(HttpUrl)
# Any of these can end a CSS url() token
_CSS_BREAKING_CHARS = re.compile(r"[\s'\"()\\]")


def is_safe_image_url(v: str | None) -> bool:
    """An http(s) URL that can sit in an HTML attribute or a CSS ``url()``."""
    if not v or _CSS_BREAKING_CHARS.search(v):
        return False
    try:
        _HTTP_URL.validate_python(v)
    except ValidationError:
        return False
    return True


def _check_image_url(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        return None
    if not is_safe_image_url(v):
        raise ValueError("Must be an http(s) URL without quotes, parentheses or spaces")
    return v


class WebsiteConfigFields(BaseModel):
    """Every editable field with its default value."""

    is_published: bool = False
    subdomain: str | None = None
    custom_domain: str | None = None

    theme_color: str = "#FF6B35"
    secondary_color: str = "#1A1A2E"
    font_family: str = "Inter"
    logo_position: LogoPosition = "left"

    hero_title: str | None = None
    hero_subtitle: str | None = None
    hero_image_url: str | None = None
    hero_cta_text: str = "Réserver une table"
    hero_cta_enabled: bool = True

    about_title: str = "À propos"
    about_content: str | None = None
    about_image_url: str | None = None
    about_enabled: bool = True

    menu_title: str = "Notre Menu"
    menu_enabled: bool = True
    menu_display_style: MenuDisplayStyle = "grid"

    gallery_title: str = "Galerie"
    gallery_images: list[str] = Field(default_factory=list)
    gallery_enabled: bool = True

    contact_title: str = "Contact"
    contact_enabled: bool = True
    show_map: bool = True
    show_opening_hours: bool = True

    reservations_title: str = "Réservations"
    reservations_enabled: bool = True
    reservations_description: str | None = None

    show_social_links: bool = True

    meta_title: str | None = None
    meta_description: str | None = None
    meta_keywords: list[str] | None = None
    google_analytics_id: str | None = None


class WebsiteConfigUpdate(BaseModel):
    """PUT body. All fields optional (patch semantics)."""

    is_published: bool | None = None
    subdomain: str | None = Field(None, max_length=63)
    custom_domain: str | None = Field(None, max_length=253)

    theme_color: str | None = Field(None, max_length=7)
    secondary_color: str | None = Field(None, max_length=7)
    font_family: str | None = Field(None, max_length=100)
    logo_position: LogoPosition | None = None

    hero_title: str | None = None
    hero_subtitle: str | None = None
    hero_image_url: str | None = None
    hero_cta_text: str | None = Field(None, max_length=100)
    hero_cta_enabled: bool | None = None

    about_title: str | None = None
    about_content: str | None = None
    about_image_url: str | None = None
    about_enabled: bool | None = None

    menu_title: str | None = None
    menu_enabled: bool | None = None
    menu_display_style: MenuDisplayStyle | None = None

    gallery_title: str | None = None
    gallery_images: list[str] | None = None
    gallery_enabled: bool | None = None

    contact_title: str | None = None
    contact_enabled: bool | None = None
    show_map: bool | None = None
    show_opening_hours: bool | None = None

    reservations_title: str | None = None
    reservations_enabled: bool | None = None
    reservations_description: str | None = None

    show_social_links: bool | None = None

    meta_title: str | None = Field(None, max_length=255)
    meta_description: str | None = None
    meta_keywords: list[str] | None = None
    google_analytics_id: str | None = Field(None, max_length=50)

    @field_validator("theme_color", "secondary_color")
    @classmethod
    def validate_hex_color(cls, v: str | None) -> str | None:
        return _check_hex_color(v)

    @field_validator("subdomain")
    @classmethod
    def validate_subdomain(cls, v: str | None) -> str | None:
        return _check_subdomain(v)

    @field_validator("custom_domain")
    @classmethod
    def validate_custom_domain(cls, v: str | None) -> str | None:
        return _normalize_domain(v)

    @field_validator("hero_image_url", "about_image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        return _check_image_url(v)

    @field_validator("gallery_images", mode="before")
    @classmethod
    def split_gallery_images(cls, v):
        return _split_lines(v)

    @field_validator("gallery_images")
    @classmethod
    def validate_gallery_images(cls, v: list[str] | None) -> list[str] | None:
        if v is not None:
            for url in v:
                _check_image_url(url)
        return v

    @field_validator("meta_keywords", mode="before")
    @classmethod
    def split_meta_keywords(cls, v):
        return _split_commas(v)

    def changes(self) -> dict:
        """Fields the caller sent. An explicit null on a defaulted field resets it."""
        updates = self.model_dump(exclude_unset=True)
        defaults = WebsiteConfigFields()
        for key, value in updates.items():
            if value is None:
                updates[key] = getattr(defaults, key)
        return updates


class WebsiteConfigResponse(WebsiteConfigFields):
    """Current config state. ``id`` is null until the first save."""

    id: uuid.UUID | None = None
    restaurant_id: uuid.UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

    @field_validator("gallery_images", mode="before")
    @classmethod
    def coerce_gallery_images(cls, v):
        return [] if v is None else v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def site_url(self) -> str | None:
        return settings.site_url(self.subdomain)


class SubdomainRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class SubdomainResponse(BaseModel):
    subdomain: str
