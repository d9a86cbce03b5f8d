# corpsleague/middleware/cache_log.py
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class CacheHeaderLogMiddleware(BaseHTTPMiddleware):
    """Logs the X-Cache state of cached scoring routes along with request timing."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        state = response.headers.get("X-Cache")
        if state is None:
            return response

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "cache %s %s %s status=%d stored_at=%s took=%.1fms",
            state,
            request.method,
            request.url.path,
            response.status_code,
            response.headers.get("X-Cache-Stored-At", "-"),
            elapsed_ms,
        )
        return response
