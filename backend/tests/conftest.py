"""Shared test fixtures."""

import os
import uuid
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Configure before the app (and its settings) are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-jwt")
os.environ.setdefault("AI_GATEWAY_API_KEY", "test-gateway-key")
os.environ.setdefault("SITE_BASE_DOMAIN", "sites.test")

from sitebuilder.core.dependencies import get_db  # noqa: E402
from sitebuilder.core.security import create_access_token  # noqa: E402
from sitebuilder.db.base import Base  # noqa: E402
from sitebuilder.main import app  # noqa: E402
from sitebuilder.models.restaurant import Restaurant  # noqa: E402
from sitebuilder.models.restaurant_website import RestaurantWebsite  # noqa: E402


@pytest.fixture
async def engine():
    """Fresh in-memory database per test, shared by every session via StaticPool."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Async DB session for seeding and direct service tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client for the FastAPI app, wired to the test database."""

    async def _test_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _test_get_db
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_db, None)


def auth_headers(owner_id: uuid.UUID) -> dict:
    """Return Authorization headers with a token for the given user."""
    token = create_access_token(sub=str(owner_id))
    return {"Authorization": f"Bearer {token}"}


async def create_restaurant(db: AsyncSession, **overrides) -> Restaurant:
    values = {
        "owner_id": uuid.uuid4(),
        "name": "Le Petit Bistro",
        "description": "Cuisine française de quartier",
        "is_active": True,
        "reservations_enabled": True,
    }
    values.update(overrides)
    restaurant = Restaurant(**values)
    db.add(restaurant)
    await db.commit()
    return restaurant


async def create_website(db: AsyncSession, restaurant: Restaurant, **overrides) -> RestaurantWebsite:
    values = {
        "subdomain": f"site-{uuid.uuid4().hex[:8]}",
        "is_published": True,
        "theme_color": "#FF6B35",
        "secondary_color": "#1A1A2E",
        "font_family": "Inter",
        "logo_position": "left",
        "hero_cta_text": "Réserver une table",
        "hero_cta_enabled": True,
        "about_title": "À propos",
        "about_enabled": True,
        "menu_title": "Notre Menu",
        "menu_enabled": True,
        "menu_display_style": "grid",
        "gallery_title": "Galerie",
        "gallery_images": [],
        "gallery_enabled": True,
        "contact_title": "Contact",
        "contact_enabled": True,
        "show_map": True,
        "show_opening_hours": True,
        "reservations_title": "Réservations",
        "reservations_enabled": True,
        "show_social_links": True,
    }
    values.update(overrides)
    website = RestaurantWebsite(restaurant_id=restaurant.id, **values)
    db.add(website)
    await db.commit()
    return website


@pytest.fixture
async def restaurant(db: AsyncSession) -> Restaurant:
    """Seed an active restaurant with reservations enabled."""
    return await create_restaurant(db)


@pytest.fixture
def owner_headers(restaurant: Restaurant) -> dict:
    return auth_headers(restaurant.owner_id)


# --- PostgreSQL with RLS (opt-in: set TEST_POSTGRES_URL to a superuser asyncpg DSN) ---

TEST_POSTGRES_URL = os.environ.get("TEST_POSTGRES_URL", "")

requires_postgres = pytest.mark.skipif(
    not TEST_POSTGRES_URL, reason="TEST_POSTGRES_URL not set"
)


def _provision_app_user_role() -> None:
    """Create/update the app_user Postgres role (idempotent, sync via psycopg2)."""
    import psycopg2
    from sqlalchemy.engine import make_url

    url = make_url(TEST_POSTGRES_URL)
    conn = psycopg2.connect(
        host=url.host,
        port=url.port or 5432,
        dbname=url.database,
        user=url.username,
        password=url.password,
    )
    conn.autocommit = True
    cur = conn.cursor()
    cur.execute(
        """
        DO $$
        BEGIN
            IF NOT EXISTS (SELECT 1 FROM pg_roles WHERE rolname = 'app_user') THEN
                CREATE ROLE app_user LOGIN PASSWORD 'app_user';
            END IF;
        END
        $$;
    """
    )
    cur.execute("ALTER ROLE app_user WITH LOGIN PASSWORD 'app_user' NOBYPASSRLS;")
    cur.execute("GRANT USAGE ON SCHEMA public TO app_user;")
    cur.close()
    conn.close()


def _app_user_url() -> str:
    from sqlalchemy.engine import make_url

    url = make_url(TEST_POSTGRES_URL).set(username="app_user", password="app_user")
    return url.render_as_string(hide_password=False)


@pytest.fixture(scope="session")
def pg_schema():
    """Provision app_user and migrate the test database to head (once per session)."""
    from alembic import command
    from alembic.config import Config

    _provision_app_user_role()

    alembic_cfg = Config()
    alembic_cfg.set_main_option(
        "script_location", str(Path(__file__).resolve().parents[1] / "alembic")
    )
    alembic_cfg.set_main_option("sqlalchemy.url", TEST_POSTGRES_URL)
    command.upgrade(alembic_cfg, "head")


@pytest.fixture
async def pg_db(pg_schema) -> AsyncGenerator[AsyncSession, None]:
    """Superuser session (RLS bypassed) for seeding. Seeded rows are committed."""
    engine = create_async_engine(TEST_POSTGRES_URL)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()
    await engine.dispose()


@pytest.fixture
async def rls_db(pg_schema) -> AsyncGenerator[AsyncSession, None]:
    """Async DB session as app_user (RLS enforced) for isolation tests."""
    engine = create_async_engine(_app_user_url())
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()
    await engine.dispose()


@pytest.fixture
async def rls_client(pg_schema) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client whose get_db connects as app_user, so RLS policies apply."""
    rls_engine = create_async_engine(_app_user_url())
    rls_factory = async_sessionmaker(rls_engine, class_=AsyncSession, expire_on_commit=False)

    async def _rls_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with rls_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _rls_get_db
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_db, None)
        await rls_engine.dispose()
