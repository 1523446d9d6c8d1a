"""Integration tests: anonymous public website lookup and HTML rendering."""

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from sitebuilder.models.restaurant import Restaurant
from tests.conftest import create_restaurant, create_website


async def test_published_site_record(client: AsyncClient, db: AsyncSession, restaurant: Restaurant):
    await create_website(db, restaurant, subdomain="le-petit-bistro", hero_title="Bienvenue")

    resp = await client.get("/api/v1/public/websites/le-petit-bistro")

    assert resp.status_code == 200
    data = resp.json()
    assert data["website_config"]["hero_title"] == "Bienvenue"
    assert data["website_config"]["site_url"] == "https://le-petit-bistro.sites.test"
    assert data["restaurant_data"]["name"] == "Le Petit Bistro"
    assert data["restaurant_data"]["id"] == str(restaurant.id)
    assert "owner_id" not in data["restaurant_data"]


async def test_unpublished_site_not_found(
    client: AsyncClient, db: AsyncSession, restaurant: Restaurant
):
    await create_website(db, restaurant, subdomain="brouillon", is_published=False)

    resp = await client.get("/api/v1/public/websites/brouillon")

    assert resp.status_code == 404


async def test_inactive_restaurant_not_found(client: AsyncClient, db: AsyncSession):
    closed = await create_restaurant(db, name="Fermé", is_active=False)
    await create_website(db, closed, subdomain="ferme")

    resp = await client.get("/api/v1/public/websites/ferme")

    assert resp.status_code == 404


async def test_unknown_subdomain_not_found(client: AsyncClient):
    resp = await client.get("/api/v1/public/websites/nobody-here")
    assert resp.status_code == 404


async def test_public_record_needs_no_auth_for_any_site(client: AsyncClient, db: AsyncSession):
    first = await create_restaurant(db, name="Un")
    second = await create_restaurant(db, name="Deux")
    await create_website(db, first, subdomain="un")
    await create_website(db, second, subdomain="deux")

    assert (await client.get("/api/v1/public/websites/un")).json()["restaurant_data"]["name"] == "Un"
    assert (
        (await client.get("/api/v1/public/websites/deux")).json()["restaurant_data"]["name"]
        == "Deux"
    )


async def test_site_page_renders_sections(client: AsyncClient, db: AsyncSession):
    restaurant = await create_restaurant(
        db,
        address="12 rue des Lilas, Paris",
        phone="+33 1 23 45 67 89",
        instagram_url="https://instagram.com/bistro",
        cuisine_type=["Française"],
        opening_hours={"lundi": {"open": "12:00", "close": "22:00"}, "dimanche": None},
    )
    await create_website(
        db,
        restaurant,
        subdomain="bistro",
        hero_title="Bienvenue au Bistro",
        gallery_images=["https://img.test/salle.jpg"],
        meta_title="Bistro | Paris",
    )

    resp = await client.get("/sites/bistro")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    html = resp.text
    assert "<title>Bistro | Paris</title>" in html
    assert "Bienvenue au Bistro" in html
    assert 'id="about"' in html
    assert 'id="menu"' in html
    assert 'id="gallery"' in html
    assert "https://img.test/salle.jpg" in html
    assert 'id="contact"' in html
    assert "12:00 - 22:00" in html
    assert "Fermé" in html
    assert "https://instagram.com/bistro" in html
    assert "https://www.google.com/maps?q=" in html
    assert 'id="reservations"' in html
    assert "Réserver une table" in html


async def test_site_page_hides_disabled_sections(client: AsyncClient, db: AsyncSession):
    restaurant = await create_restaurant(db, reservations_enabled=False)
    await create_website(
        db,
        restaurant,
        subdomain="sobre",
        about_enabled=False,
        menu_enabled=False,
        contact_enabled=False,
    )

    resp = await client.get("/sites/sobre")

    assert resp.status_code == 200
    html = resp.text
    assert 'id="about"' not in html
    assert 'id="menu"' not in html
    assert 'id="gallery"' not in html
    assert 'id="contact"' not in html
    assert 'id="reservations"' not in html
    assert "hero-cta" not in html


async def test_site_page_not_found(client: AsyncClient):
    resp = await client.get("/sites/nobody-here")

    assert resp.status_code == 404
    assert "Site non trouvé" in resp.text


async def test_site_page_drops_css_breaking_cover_url(client: AsyncClient, db: AsyncSession):
    restaurant = await create_restaurant(
        db, cover_image_url="https://img.test/c.jpg'); background: url(https://evil.test/x"
    )
    await create_website(db, restaurant, subdomain="couverture")

    resp = await client.get("/sites/couverture")

    assert resp.status_code == 200
    assert "evil.test" not in resp.text
    assert "background-image" not in resp.text
