import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__, bootstrap_sql
from .app.health_endpoints import router as health_router
from .app.process_endpoint import router as process_router
from .config import Settings
from .db import Datastore
from .errors import ValidationError
from .lifecycle import LifecycleManager
from .outcome import describe

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    lifecycle: LifecycleManager = app.state.lifecycle
    try:
        if app.state.datastore is None:
            app.state.datastore = await Datastore.open(settings)
        lifecycle.on_shutdown(app.state.datastore.close)
        await bootstrap_sql.ensure(app.state.datastore, enabled=settings.run_migrations)
    except Exception as e:
        lifecycle.abort(e)
        raise
    lifecycle.serving()
    logger.info("Server is running on port %s", settings.port)
    logger.info("Environment: %s", settings.environment)
    logger.info("Health check: http://localhost:%s/health", settings.port)
    yield
    await lifecycle.drain()


def create_app(settings: Optional[Settings] = None, datastore=None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="DevOps App", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.datastore = datastore
    app.state.lifecycle = LifecycleManager()

    @app.exception_handler(ValidationError)
    async def _bad_request(request: Request, exc: ValidationError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.middleware("http")
    async def guard(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception("Processing error")
            return JSONResponse({"error": "Internal server error", "message": describe(e)}, status_code=500)

    app.include_router(health_router)
    app.include_router(process_router)
    return app
