import logging
import os

from fastapi import FastAPI
from app.settings import settings
from app.logging import configure_logging
from app.error_handlers import attach_error_handlers
from api.router import api_router
from infra.db.session import init_db

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Casting marketplace: profiles, projects, applications and AI shortlisting",
)


@app.on_event("startup")
def _on_startup():
    init_db()
    os.makedirs(settings.STORAGE_DIR, exist_ok=True)
    logger.info(f"{settings.APP_NAME} started (env={settings.ENV}, "
                f"talent index {'on' if settings.TALENT_INDEX_ENABLED else 'off'})")


attach_error_handlers(app)
app.include_router(api_router, prefix=settings.API_PREFIX)
