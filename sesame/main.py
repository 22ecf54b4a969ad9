import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from sesame import __version__
from sesame.core.config import get_settings
from sesame.core.container import ApplicationContainer
from sesame.core.logging import configure_logging
from sesame.interfaces.http import create_api_router
from sesame.interfaces.http.errors import register_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: ApplicationContainer | None = getattr(app.state, "container", None)
    owns_container = container is None
    if container is None:
        settings = get_settings()
        configure_logging(settings)
        container = ApplicationContainer.from_settings(settings)
        app.state.container = container

    await container.startup()
    logger.info("Server started", extra={"port": container.settings.port})
    try:
        yield
    finally:
        await container.shutdown()
        if owns_container:
            del app.state.container


def create_app(container: ApplicationContainer | None = None) -> FastAPI:
    app = FastAPI(
        title="Sesame Door",
        description="Opens a door strike once a Lightning invoice is paid",
        version=__version__,
        lifespan=lifespan,
    )
    if container is not None:
        app.state.container = container

    register_exception_handlers(app)
    app.include_router(create_api_router())
    return app
