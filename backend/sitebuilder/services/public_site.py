"""Public website lookup and page composition.

``get_public_website`` returns the denormalized config+restaurant record for
a subdomain, restricted to published sites of active restaurants.
``build_site_page`` turns one record into the page the template renders:
a section is present only when its flag is on, and text fields fall back
from the config value to the restaurant value to a fixed default.
"""

from dataclasses import dataclass, field
from urllib.parse import quote_plus

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sitebuilder.models.restaurant import Restaurant
from sitebuilder.models.restaurant_website import RestaurantWebsite
from sitebuilder.schemas.public_website import PublicRestaurantData, PublicWebsiteResponse
from sitebuilder.schemas.website_config import (
    WebsiteConfigFields,
    WebsiteConfigResponse,
    is_safe_image_url,
)


_DEFAULTS = WebsiteConfigFields()
CLOSED_LABEL = "Fermé"


async def get_public_website(db: AsyncSession, subdomain: str) -> list[PublicWebsiteResponse]:
    """All published sites of active restaurants with this subdomain (zero or one)."""
    result = await db.execute(
        select(RestaurantWebsite, Restaurant)
        .join(Restaurant, Restaurant.id == RestaurantWebsite.restaurant_id)
        .where(
            RestaurantWebsite.subdomain == subdomain,
            RestaurantWebsite.is_published.is_(True),
            Restaurant.is_active.is_(True),
        )
    )
    return [
        PublicWebsiteResponse(
            website_config=WebsiteConfigResponse.model_validate(website).model_dump(mode="json"),
            restaurant_data=PublicRestaurantData.model_validate(restaurant).model_dump(
                mode="json"
            ),
        )
        for website, restaurant in result.all()
    ]


def _first(*values):
    """First truthy value, or the last candidate."""
    for value in values[:-1]:
        if value:
            return value
    return values[-1]


@dataclass
class NavItem:
    anchor: str
    label: str


@dataclass
class Hero:
    title: str
    subtitle: str | None
    background_url: str | None
    cuisine_types: list[str]
    cta_text: str | None  # None when the call-to-action is hidden


@dataclass
class About:
    title: str
    content: str | None
    image_url: str | None
    specialties: list[str]


@dataclass
class Menu:
    title: str
    display_style: str
    dietary_options: list[str]


@dataclass
class Gallery:
    title: str
    images: list[str]


@dataclass
class SocialLink:
    network: str
    url: str


@dataclass
class Contact:
    title: str
    address: str | None
    phone: str | None
    email: str | None
    social_links: list[SocialLink]
    opening_hours: list[tuple[str, str]]
    map_embed_url: str | None


@dataclass
class Reservations:
    title: str
    description: str | None


@dataclass
class SitePage:
    restaurant_id: str
    restaurant_name: str
    title: str
    meta_description: str | None
    meta_keywords: str | None
    theme_color: str
    secondary_color: str
    font_family: str
    logo_position: str
    logo_url: str | None
    google_analytics_id: str | None
    hero: Hero
    nav: list[NavItem] = field(default_factory=list)
    about: About | None = None
    menu: Menu | None = None
    gallery: Gallery | None = None
    contact: Contact | None = None
    reservations: Reservations | None = None

    @property
    def sections(self) -> list[str]:
        """Anchors of the rendered sections, in page order."""
        names = ["about", "menu", "gallery", "contact", "reservations"]
        return [name for name in names if getattr(self, name) is not None]


def _format_hours(hours) -> str:
    if not hours:
        return CLOSED_LABEL
    if isinstance(hours, dict):
        opens, closes = hours.get("open"), hours.get("close")
        if hours.get("closed") or not (opens and closes):
            return CLOSED_LABEL
        return f"{opens} - {closes}"
    return str(hours)


def build_site_page(record: PublicWebsiteResponse) -> SitePage:
    config = record.website_config
    restaurant = record.restaurant_data
    name = restaurant.get("name") or ""
    description = restaurant.get("description")

    reservations_open = bool(config.get("reservations_enabled")) and bool(
        restaurant.get("reservations_enabled")
    )

    keywords = config.get("meta_keywords")
    page = SitePage(
        restaurant_id=str(restaurant.get("id", "")),
        restaurant_name=name,
        title=_first(config.get("meta_title"), name),
        meta_description=_first(config.get("meta_description"), description),
        meta_keywords=", ".join(keywords) if keywords else None,
        theme_color=_first(config.get("theme_color"), _DEFAULTS.theme_color),
        secondary_color=_first(config.get("secondary_color"), _DEFAULTS.secondary_color),
        font_family=_first(config.get("font_family"), _DEFAULTS.font_family),
        logo_position=_first(config.get("logo_position"), _DEFAULTS.logo_position),
        logo_url=restaurant.get("logo_url"),
        google_analytics_id=config.get("google_analytics_id") or None,
        hero=Hero(
            title=_first(config.get("hero_title"), name),
            subtitle=_first(config.get("hero_subtitle"), description, None),
            # Rendered inside a CSS url(); the restaurant's cover URL is unvalidated here
            background_url=_first(
                *(
                    url
                    for url in (config.get("hero_image_url"), restaurant.get("cover_image_url"))
                    if is_safe_image_url(url)
                ),
                None,
            ),
            cuisine_types=list(restaurant.get("cuisine_type") or []),
            cta_text=(
                _first(config.get("hero_cta_text"), _DEFAULTS.hero_cta_text)
                if config.get("hero_cta_enabled") and reservations_open
                else None
            ),
        ),
    )

    if config.get("about_enabled"):
        page.about = About(
            title=_first(config.get("about_title"), _DEFAULTS.about_title),
            content=_first(
                config.get("about_content"), restaurant.get("description_fr"), description
            ),
            image_url=_first(config.get("about_image_url"), restaurant.get("logo_url"), None),
            specialties=list(restaurant.get("restaurant_specialties") or []),
        )
        page.nav.append(NavItem("about", "À propos"))

    if config.get("menu_enabled"):
        page.menu = Menu(
            title=_first(config.get("menu_title"), _DEFAULTS.menu_title),
            display_style=_first(config.get("menu_display_style"), _DEFAULTS.menu_display_style),
            dietary_options=list(restaurant.get("dietary_restrictions") or []),
        )
        page.nav.append(NavItem("menu", "Menu"))

    gallery_images = config.get("gallery_images") or []
    if config.get("gallery_enabled") and gallery_images:
        page.gallery = Gallery(
            title=_first(config.get("gallery_title"), _DEFAULTS.gallery_title),
            images=list(gallery_images),
        )
        page.nav.append(NavItem("gallery", "Galerie"))

    if config.get("contact_enabled"):
        social_links = []
        if config.get("show_social_links"):
            for network in ("instagram", "facebook", "tiktok"):
                url = restaurant.get(f"{network}_url")
                if url:
                    social_links.append(SocialLink(network, url))

        opening_hours = []
        if config.get("show_opening_hours"):
            opening_hours = [
                (day, _format_hours(hours))
                for day, hours in (restaurant.get("opening_hours") or {}).items()
            ]

        address = restaurant.get("address")
        page.contact = Contact(
            title=_first(config.get("contact_title"), _DEFAULTS.contact_title),
            address=address,
            phone=restaurant.get("phone"),
            email=restaurant.get("email"),
            social_links=social_links,
            opening_hours=opening_hours,
            map_embed_url=(
                f"https://www.google.com/maps?q={quote_plus(address)}&output=embed"
                if config.get("show_map") and address
                else None
            ),
        )
        page.nav.append(NavItem("contact", "Contact"))

    if reservations_open:
        page.reservations = Reservations(
            title=_first(config.get("reservations_title"), _DEFAULTS.reservations_title),
            description=config.get("reservations_description") or None,
        )

    return page
