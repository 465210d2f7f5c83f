"""Health check and utility routes"""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
import logging

from pymongo.errors import PyMongoError

from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("unimeal.api.health")


@router.get("/", response_class=PlainTextResponse)
def root():
    return f"{settings.app_name} server is running"


@router.get("/health-check")
def health_check(request: Request):
    """Report liveness and whether the document store answers a ping"""
    store = getattr(request.app.state, "store", None)
    database = "not configured"
    if store is not None and store.is_connected:
        try:
            store.ping()
            database = "connected"
        except PyMongoError as e:
            logger.warning("Store ping failed: %s", e)
            database = "unreachable"
    return {"status": "ok", "service": settings.app_name, "database": database}
