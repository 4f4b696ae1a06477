# cartstore/api/routers/health.py
import redis
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from cartstore.data.database import get_redis
from cartstore.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health(client: redis.Redis = Depends(get_redis)):
    try:
        client.ping()
    except RedisError as e:
        logger.error(f"Health check: redis unavailable: {e}")
        return JSONResponse(status_code=503, content={"status": "degraded", "redis": "down"})
    return {"status": "ok", "redis": "up"}
