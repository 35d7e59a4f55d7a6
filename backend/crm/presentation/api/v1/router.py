"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from crm.presentation.api.v1.endpoints.health import router as health_router
from crm.presentation.api.v1.endpoints.customers import router as customers_router
from crm.presentation.api.v1.endpoints.statistics import router as statistics_router
from crm.presentation.api.v1.endpoints.activities import router as activities_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(customers_router)
router.include_router(statistics_router)
router.include_router(activities_router)
