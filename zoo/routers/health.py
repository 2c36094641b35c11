"""
System health check endpoint.
Returns status of backend + document store + state cache.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from zoo.database import get_db
from zoo.dependencies import get_state_cache
from zoo.stores.state_cache import StateCache
from zoo.utils.logger import get_logger
from zoo.utils.time_utils import utcnow

router = APIRouter()
logger = get_logger(__name__)


@router.get("/health", summary="System health check")
async def health_check(db: Session = Depends(get_db), cache: StateCache = Depends(get_state_cache)):
    result = {
        "status": "ok",
        "timestamp": utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
        "state_cache": "unknown",
    }

    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
    except SQLAlchemyError as e:
        logger.error(f"Health: database unreachable: {e}")
        result["database"] = f"error: {e}"
        result["status"] = "degraded"

    try:
        await cache.ping()
        result["state_cache"] = "ok"
    except (RedisError, OSError) as e:
        logger.error(f"Health: state cache unreachable: {e}")
        result["state_cache"] = f"error: {e}"
        result["status"] = "degraded"

    return result
