import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from sitebuilder.db.base import RestaurantScopedBase


class RestaurantWebsite(RestaurantScopedBase):
    __tablename__ = "restaurant_websites"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    # restaurant_id inherited from RestaurantScopedBase

    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    subdomain: Mapped[str | None] = mapped_column(Text, unique=True, nullable=True, index=True)
    custom_domain: Mapped[str | None] = mapped_column(
        Text, unique=True, nullable=True, index=True
    )

    # Theme
    theme_color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    secondary_color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    font_family: Mapped[str | None] = mapped_column(Text, nullable=True)
    logo_position: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Hero
    hero_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    hero_subtitle: Mapped[str | None] = mapped_column(Text, nullable=True)
    hero_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    hero_cta_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    hero_cta_enabled: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    # About
    about_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    about_content: Mapped[str | None] = mapped_column(Text, nullable=True)
    about_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    about_enabled: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    # Menu
    menu_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    menu_enabled: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    menu_display_style: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Gallery
    gallery_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    gallery_images: Mapped[list | None] = mapped_column(JSON, nullable=True, default=list)
    gallery_enabled: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    # Contact
    contact_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_enabled: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    show_map: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    show_opening_hours: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    # Reservations
    reservations_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    reservations_enabled: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    reservations_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    show_social_links: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    # SEO / analytics
    meta_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    meta_keywords: Mapped[list | None] = mapped_column(JSON, nullable=True)
    google_analytics_id: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
