"""Create restaurant_websites table with RLS

The restaurants table belongs to the restaurant dashboard. It is created
here only when missing, so a fresh database can run the service on its own.

Revision ID: 001
Revises:
Create Date: 2025-12-09

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Empty GUC values must cast to NULL, not fail
_USER = "NULLIF(current_setting('app.current_user_id', true), '')::uuid"
_IS_OWNER = f"""
    EXISTS (
        SELECT 1 FROM restaurants r
        WHERE r.id = restaurant_websites.restaurant_id
        AND r.owner_id = {_USER}
    )
"""


def _create_restaurants_if_missing() -> None:
    if sa.inspect(op.get_bind()).has_table("restaurants"):
        return
    op.create_table(
        "restaurants",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            primary_key=True,
        ),
        sa.Column("owner_id", sa.UUID(), nullable=False, index=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("description_fr", sa.Text(), nullable=True),
        sa.Column("description_en", sa.Text(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("cuisine_type", sa.JSON(), nullable=True),
        sa.Column("price_range", sa.String(20), nullable=True),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("cover_image_url", sa.Text(), nullable=True),
        sa.Column("opening_hours", sa.JSON(), nullable=True),
        sa.Column(
            "reservations_enabled", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("instagram_url", sa.Text(), nullable=True),
        sa.Column("facebook_url", sa.Text(), nullable=True),
        sa.Column("tiktok_url", sa.Text(), nullable=True),
        sa.Column("dietary_restrictions", sa.JSON(), nullable=True),
        sa.Column("allergens", sa.JSON(), nullable=True),
        sa.Column("restaurant_specialties", sa.JSON(), nullable=True),
        sa.Column("service_types", sa.JSON(), nullable=True),
        sa.Column("parking", sa.Text(), nullable=True),
        sa.Column("dress_code", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )


def upgrade() -> None:
    _create_restaurants_if_missing()

    op.create_table(
        "restaurant_websites",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            primary_key=True,
        ),
        sa.Column(
            "restaurant_id",
            sa.UUID(),
            sa.ForeignKey("restaurants.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("subdomain", sa.Text(), nullable=True, unique=True),
        sa.Column("custom_domain", sa.Text(), nullable=True, unique=True),
        # Theme
        sa.Column("theme_color", sa.String(7), server_default="#FF6B35"),
        sa.Column("secondary_color", sa.String(7), server_default="#1A1A2E"),
        sa.Column("font_family", sa.Text(), server_default="Inter"),
        sa.Column("logo_position", sa.Text(), server_default="left"),
        # Hero
        sa.Column("hero_title", sa.Text(), nullable=True),
        sa.Column("hero_subtitle", sa.Text(), nullable=True),
        sa.Column("hero_image_url", sa.Text(), nullable=True),
        sa.Column("hero_cta_text", sa.Text(), server_default="Réserver une table"),
        sa.Column("hero_cta_enabled", sa.Boolean(), server_default="true"),
        # About
        sa.Column("about_title", sa.Text(), server_default="À propos"),
        sa.Column("about_content", sa.Text(), nullable=True),
        sa.Column("about_image_url", sa.Text(), nullable=True),
        sa.Column("about_enabled", sa.Boolean(), server_default="true"),
        # Menu
        sa.Column("menu_title", sa.Text(), server_default="Notre Menu"),
        sa.Column("menu_enabled", sa.Boolean(), server_default="true"),
        sa.Column("menu_display_style", sa.Text(), server_default="grid"),
        # Gallery
        sa.Column("gallery_title", sa.Text(), server_default="Galerie"),
        sa.Column("gallery_images", sa.JSON(), server_default=sa.text("'[]'::json")),
        sa.Column("gallery_enabled", sa.Boolean(), server_default="true"),
        # Contact
        sa.Column("contact_title", sa.Text(), server_default="Contact"),
        sa.Column("contact_enabled", sa.Boolean(), server_default="true"),
        sa.Column("show_map", sa.Boolean(), server_default="true"),
        sa.Column("show_opening_hours", sa.Boolean(), server_default="true"),
        # Reservations
        sa.Column("reservations_title", sa.Text(), server_default="Réservations"),
        sa.Column("reservations_enabled", sa.Boolean(), server_default="true"),
        sa.Column("reservations_description", sa.Text(), nullable=True),
        sa.Column("show_social_links", sa.Boolean(), server_default="true"),
        # SEO / analytics
        sa.Column("meta_title", sa.Text(), nullable=True),
        sa.Column("meta_description", sa.Text(), nullable=True),
        sa.Column("meta_keywords", sa.JSON(), nullable=True),
        sa.Column("google_analytics_id", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )

    op.create_index("idx_restaurant_websites_restaurant_id", "restaurant_websites", ["restaurant_id"])
    op.create_index("idx_restaurant_websites_subdomain", "restaurant_websites", ["subdomain"])
    op.create_index(
        "idx_restaurant_websites_custom_domain", "restaurant_websites", ["custom_domain"]
    )

    # --- updated_at trigger ---
    op.execute("""
        CREATE OR REPLACE FUNCTION set_restaurant_websites_updated_at()
        RETURNS trigger LANGUAGE plpgsql AS $$
        BEGIN
            NEW.updated_at = now();
            RETURN NEW;
        END;
        $$
    """)
    op.execute("""
        CREATE TRIGGER update_restaurant_websites_updated_at
        BEFORE UPDATE ON restaurant_websites
        FOR EACH ROW
        EXECUTE FUNCTION set_restaurant_websites_updated_at()
    """)

    # --- RLS ---
    op.execute("ALTER TABLE restaurant_websites ENABLE ROW LEVEL SECURITY")
    op.execute("ALTER TABLE restaurant_websites FORCE ROW LEVEL SECURITY")

    op.execute(f"""
        CREATE POLICY owner_select ON restaurant_websites
        FOR SELECT
        USING ({_IS_OWNER})
    """)
    op.execute(f"""
        CREATE POLICY owner_insert ON restaurant_websites
        FOR INSERT
        WITH CHECK ({_IS_OWNER})
    """)
    op.execute(f"""
        CREATE POLICY owner_update ON restaurant_websites
        FOR UPDATE
        USING ({_IS_OWNER})
    """)
    op.execute(f"""
        CREATE POLICY owner_delete ON restaurant_websites
        FOR DELETE
        USING ({_IS_OWNER})
    """)
    op.execute("""
        CREATE POLICY public_select_published ON restaurant_websites
        FOR SELECT
        USING (is_published = true)
    """)

    # --- Subdomain generation ---
    # SECURITY DEFINER: the caller's RLS view hides other owners' unpublished
    # rows, but their subdomains are still taken. Must be owned by a role
    # that bypasses RLS (the migration role).
    op.execute("""
        CREATE OR REPLACE FUNCTION generate_website_subdomain(base_slug text)
        RETURNS text
        LANGUAGE plpgsql
        SECURITY DEFINER SET search_path = public
        AS $$
        DECLARE
            final_slug text := base_slug;
            counter integer := 0;
        BEGIN
            WHILE EXISTS (
                SELECT 1 FROM restaurant_websites WHERE subdomain = final_slug
            ) LOOP
                counter := counter + 1;
                final_slug := base_slug || '-' || counter;
            END LOOP;
            RETURN final_slug;
        END;
        $$
    """)

    # --- Grant permissions to app_user ---
    op.execute(
        "GRANT SELECT, INSERT, UPDATE, DELETE ON restaurant_websites TO app_user"
    )
    # Ownership checks and the owner policies read restaurants as the caller
    op.execute("GRANT SELECT ON restaurants TO app_user")
    op.execute("GRANT EXECUTE ON FUNCTION generate_website_subdomain(text) TO app_user")


def downgrade() -> None:
    op.execute("DROP FUNCTION IF EXISTS generate_website_subdomain(text)")
    for policy in (
        "owner_select",
        "owner_insert",
        "owner_update",
        "owner_delete",
        "public_select_published",
    ):
        op.execute(f"DROP POLICY IF EXISTS {policy} ON restaurant_websites")
    op.execute("ALTER TABLE restaurant_websites DISABLE ROW LEVEL SECURITY")
    op.execute(
        "REVOKE SELECT, INSERT, UPDATE, DELETE ON restaurant_websites FROM app_user"
    )
    op.execute(
        "DROP TRIGGER IF EXISTS update_restaurant_websites_updated_at ON restaurant_websites"
    )
    op.execute("DROP FUNCTION IF EXISTS set_restaurant_websites_updated_at()")
    op.drop_table("restaurant_websites")
