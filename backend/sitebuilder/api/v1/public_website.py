"""Public read-only website endpoints (anonymous, resolved by subdomain).

Only published sites of active restaurants resolve; anything else is a 404,
never the record.
"""

import logging
from datetime import UTC, datetime
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from sitebuilder.core.dependencies import get_db
from sitebuilder.schemas.public_website import PublicWebsiteResponse
from sitebuilder.services.public_site import build_site_page, get_public_website

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

router = APIRouter()
site_router = APIRouter()


@router.get("/{subdomain}", response_model=PublicWebsiteResponse)
async def get_public_website_record(
    subdomain: str,
    db: AsyncSession = Depends(get_db),
) -> PublicWebsiteResponse:
    """Config + restaurant record for a published site."""
    records = await get_public_website(db, subdomain)
    if not records:
        raise HTTPException(status_code=404, detail="Site not found")
    return records[0]


@site_router.get("/{subdomain}", response_class=HTMLResponse)
async def render_public_site(
    subdomain: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> HTMLResponse:
    """Server-rendered public site. Unknown or unpublished subdomains get the 404 page."""
    records = await get_public_website(db, subdomain)
    if not records:
        logger.info("Public site not found: %s", subdomain)
        return templates.TemplateResponse(
            request,
            "not_found.html",
            {"message": "Site non trouvé"},
            status_code=404,
        )

    page = build_site_page(records[0])
    return templates.TemplateResponse(
        request, "site.html", {"page": page, "year": datetime.now(UTC).year}
    )
