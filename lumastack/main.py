import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from lumastack import __version__
from lumastack.core.config import Settings, get_settings
from lumastack.core.container import ApplicationContainer
from lumastack.core.logging_config import configure_logging
from lumastack.interfaces.http import create_api_router
from lumastack.interfaces.http.errors import register_exception_handlers
from lumastack.interfaces.http.routers import health as health_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        container = ApplicationContainer.from_settings(settings)
        await container.startup()
        app.state.container = container
        logger.info("%s %s started (%s)", settings.project_name, __version__, settings.environment)
        try:
            yield
        finally:
            await container.shutdown()
            logger.info("%s stopped", settings.project_name)

    app = FastAPI(
        title=settings.project_name,
        description=settings.description,
        version=__version__,
        lifespan=lifespan,
    )

    register_exception_handlers(app)
    app.include_router(health_router.router, tags=["health"])
    app.include_router(create_api_router(settings.api_prefix))

    return app


app = create_app()
