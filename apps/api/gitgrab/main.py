from contextlib import asynccontextmanager

from fastapi import FastAPI
from gitgrab.core.config import settings
from gitgrab.core.logging import setup_logging
from gitgrab.services.form.store import store

from gitgrab.api.v1.health import router as health_router
from gitgrab.api.v1.forms import router as forms_router
from gitgrab.api.v1.ui import router as ui_router

logger = setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("{} started (env={}, validator={})", settings.APP_NAME, settings.ENV, settings.VALIDATOR_PROVIDER)
    yield
    store.clear()

def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

    app.include_router(ui_router)
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(forms_router, prefix="/api/v1")

    return app

app = create_app()
