"""Access-лог запросов (включается только в development)"""
import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("userstub.access")


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        length = response.headers.get("content-length", "-")
        logger.info(
            "%s %s %s %.3f ms - %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            length,
        )
        return response
