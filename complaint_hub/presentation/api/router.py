"""Top-level API router. Includes the endpoint routers under /api."""

from fastapi import APIRouter

from complaint_hub.presentation.api.endpoints.complaints import router as complaints_router
from complaint_hub.presentation.api.endpoints.health import router as health_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(complaints_router)
