"""Health check endpoint — reports version and customer count."""

from fastapi import APIRouter, Depends

from crm.infrastructure.container import CRMContainer
from crm.infrastructure.dependencies import get_container

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(container: CRMContainer = Depends(get_container)) -> dict:
    """Returns the current application health status."""
    settings = container.settings
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "storage_backend": settings.storage_backend,
        "customers": len(container.store),
    }
