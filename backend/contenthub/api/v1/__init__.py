"""Content Hub - API v1 Router."""
from fastapi import APIRouter

from contenthub.api.v1.auth import router as auth_router
from contenthub.api.v1.admin import router as admin_router
from contenthub.api.v1.curriculum import router as curriculum_router
from contenthub.api.v1.materials import router as materials_router
from contenthub.api.v1.assignments import router as assignments_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(admin_router)
api_router.include_router(curriculum_router)
api_router.include_router(materials_router)
api_router.include_router(assignments_router)
