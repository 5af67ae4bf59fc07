"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from inkwell.presentation.api.v1.endpoints.health import router as health_router
from inkwell.presentation.api.v1.endpoints.auth import router as auth_router
from inkwell.presentation.api.v1.endpoints.profiles import router as profiles_router
from inkwell.presentation.api.v1.endpoints.articles import router as articles_router
from inkwell.presentation.api.v1.endpoints.comments import router as comments_router
from inkwell.presentation.api.v1.endpoints.engagement import router as engagement_router
from inkwell.presentation.api.v1.endpoints.uploads import router as uploads_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(auth_router)
router.include_router(profiles_router)
router.include_router(articles_router)
router.include_router(comments_router)
router.include_router(engagement_router)
router.include_router(uploads_router)
