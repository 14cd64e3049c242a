"""
Rate limiting по IP клиента со скользящим окном.
Единственное состояние, общее для всех запросов, поэтому доступ под блокировкой.
"""
from __future__ import annotations

import logging
import math
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, Tuple

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


class SlidingWindowLimiter:
    """Не более max_requests запросов за последние window_seconds для каждого ключа."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def tracked_keys(self) -> int:
        """Количество отслеживаемых ключей"""
        with self._lock:
            return len(self._hits)

    def _prune(self, hits: Deque[float], now: float) -> None:
        while hits and hits[0] <= now - self.window_seconds:
            hits.popleft()

    def _sweep(self, now: float) -> None:
        """Удаляет ключи без запросов в окне; вызывается не чаще раза за окно"""
        for key in list(self._hits):
            hits = self._hits[key]
            self._prune(hits, now)
            if not hits:
                del self._hits[key]
        self._last_sweep = now

    def hit(self, key: str) -> Tuple[bool, int, float]:
        """
        Регистрирует запрос для ключа.

        Returns:
            (allowed, remaining, retry_after) — retry_after в секундах, 0 если запрос разрешён
        """
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)

            hits = self._hits.get(key)
            if hits is None:
                hits = self._hits[key] = deque()
            self._prune(hits, now)

            if len(hits) >= self.max_requests:
                retry_after = hits[0] + self.window_seconds - now
                return False, 0, max(retry_after, 0.0)

            hits.append(now)
            return True, self.max_requests - len(hits), 0.0

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._last_sweep = self._clock()


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, limiter: SlidingWindowLimiter):
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request: Request, call_next):
        key = client_key(request)
        allowed, remaining, retry_after = self.limiter.hit(key)
        if not allowed:
            logger.warning(f"Rate limit exceeded for {key}")
            return PlainTextResponse(
                RATE_LIMIT_MESSAGE,
                status_code=429,
                headers={
                    "Retry-After": str(math.ceil(retry_after)),
                    "X-RateLimit-Limit": str(self.limiter.max_requests),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limiter.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response
