# corpsleague/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from corpsleague.api import routes_league, routes_scoring
from corpsleague.core.config import settings
from corpsleague.core.logging import configure_logging
from corpsleague.middleware.cache_log import CacheHeaderLogMiddleware

configure_logging(settings.LOG_LEVEL)
settings.validate_at_startup()

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)
app.add_middleware(CacheHeaderLogMiddleware)

ALLOWED_ORIGINS = settings.CORS_ORIGINS if isinstance(settings.CORS_ORIGINS, list) else []
logger.info("CORS allow_origins = %s", ALLOWED_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1):5173$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)

# Routers
app.include_router(routes_scoring.router)
app.include_router(routes_league.router)


@app.get("/health")
def health():
    return {"ok": True, "env": settings.APP_ENV}
