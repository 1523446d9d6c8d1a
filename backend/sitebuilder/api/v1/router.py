"""Aggregate all v1 sub-routers."""

from fastapi import APIRouter

from sitebuilder.api.v1.health import router as health_router
from sitebuilder.api.v1.images import router as images_router
from sitebuilder.api.v1.public_website import router as public_website_router
from sitebuilder.api.v1.website_config import router as website_config_router
from sitebuilder.api.v1.website_config import subdomain_router

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["health"])
api_v1_router.include_router(
    website_config_router, prefix="/restaurants/{restaurant_id}/website", tags=["website-config"]
)
api_v1_router.include_router(subdomain_router, prefix="/websites", tags=["website-config"])
api_v1_router.include_router(
    public_website_router, prefix="/public/websites", tags=["public-website"]
)
api_v1_router.include_router(images_router, prefix="/functions", tags=["functions"])
