"""FastAPI entrypoint for the bakery order-management backend."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from bakery.api.v1.api import api_router
from bakery.core.config import settings
from bakery.db import session as db_session
from bakery.db.base import Base

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup() -> None:
    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    logger.info("Business time zone: %s", settings.business_timezone)
    if not settings.admin_password_hash:
        logger.warning("ADMIN_PASSWORD_HASH not set; admin login is disabled.")
    Base.metadata.create_all(bind=db_session.engine)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
