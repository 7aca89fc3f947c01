"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from taxdesk.presentation.api.v1.endpoints.health import router as health_router
from taxdesk.presentation.api.v1.endpoints.session import router as session_router
from taxdesk.presentation.api.v1.endpoints.edit import router as edit_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(session_router)
router.include_router(edit_router)
