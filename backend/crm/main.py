"""FastAPI application factory."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crm.application.interfaces import RecordStorage
from crm.config import Settings, get_settings
from crm.infrastructure.container import build_container
from crm.infrastructure.logging.log_config import setup_logging
from crm.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    customer_storage: RecordStorage | None = None,
    activity_storage: RecordStorage | None = None,
) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    The customer store lives for as long as the application; it is built
    here rather than in a lifespan handler so that every transport (including
    test clients that skip lifespan events) sees the same instance.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
    )
    app.state.container = build_container(
        settings,
        customer_storage=customer_storage,
        activity_storage=activity_storage,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "crm.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
