from fastapi import APIRouter

from app.features.health.routes.health import router as health_router
from app.features.link_preview.routes.link_preview import router as link_preview_router

api_router = APIRouter()


# Register all feature routes
api_router.include_router(health_router)
api_router.include_router(link_preview_router)
