"""Тесты middleware: rate limiting, заголовки безопасности, сжатие, access-лог"""
import logging
import pytest
import sys
from pathlib import Path

from fastapi.testclient import TestClient

# Добавляем корневую директорию проекта в путь
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from userstub.main import create_app
from userstub.middleware.rate_limit import RATE_LIMIT_MESSAGE, SlidingWindowLimiter
from userstub.middleware.security import SECURITY_HEADERS


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestSlidingWindowLimiter:
    """Тесты для SlidingWindowLimiter"""

    def test_allows_up_to_limit(self):
        """Тест: разрешено ровно max_requests запросов"""
        limiter = SlidingWindowLimiter(3, 60, clock=FakeClock())
        results = [limiter.hit("1.2.3.4") for _ in range(4)]
        assert [allowed for allowed, _, _ in results] == [True, True, True, False]
        assert [remaining for _, remaining, _ in results[:3]] == [2, 1, 0]

    def test_keys_are_independent(self):
        """Тест: лимит считается отдельно для каждого IP"""
        limiter = SlidingWindowLimiter(1, 60, clock=FakeClock())
        assert limiter.hit("1.1.1.1")[0]
        assert not limiter.hit("1.1.1.1")[0]
        assert limiter.hit("2.2.2.2")[0]

    def test_window_slides(self):
        """Тест: старые запросы выходят из окна"""
        clock = FakeClock()
        limiter = SlidingWindowLimiter(2, 60, clock=clock)
        limiter.hit("ip")
        clock.now += 30
        limiter.hit("ip")

        allowed, _, retry_after = limiter.hit("ip")
        assert not allowed
        assert retry_after == pytest.approx(30)

        clock.now += 30
        assert limiter.hit("ip")[0]
        assert not limiter.hit("ip")[0]

    def test_reset(self):
        """Тест: reset очищает счётчики"""
        limiter = SlidingWindowLimiter(1, 60, clock=FakeClock())
        limiter.hit("ip")
        limiter.reset()
        assert limiter.hit("ip")[0]

    def test_stale_keys_are_dropped(self):
        """Тест: IP без запросов в окне удаляются из памяти"""
        clock = FakeClock()
        limiter = SlidingWindowLimiter(5, 60, clock=clock)
        for i in range(10_000):
            limiter.hit(f"10.0.{i // 256}.{i % 256}")
        assert limiter.tracked_keys() == 10_000

        clock.now += 60 * 1000
        limiter.hit("192.168.0.1")
        assert limiter.tracked_keys() == 1

    def test_active_keys_survive_sweep(self):
        """Тест: IP с запросами в окне сохраняют счётчик после очистки"""
        clock = FakeClock()
        limiter = SlidingWindowLimiter(2, 60, clock=clock)
        limiter.hit("old")
        clock.now += 59
        limiter.hit("active")
        limiter.hit("active")
        clock.now += 2
        allowed, _, _ = limiter.hit("active")
        assert not allowed
        assert limiter.tracked_keys() == 1


class TestRateLimitMiddleware:
    """Тесты для ограничения запросов через HTTP"""

    def test_rejects_after_limit(self):
        """Тест: после лимита — 429 с фиксированным сообщением"""
        client = TestClient(create_app(rate_limit_max=3, rate_limit_window_seconds=900))
        for _ in range(3):
            assert client.get("/health").status_code == 200

        response = client.get("/api/users/1")
        assert response.status_code == 429
        assert response.text == RATE_LIMIT_MESSAGE
        assert int(response.headers["retry-after"]) > 0
        assert response.headers["x-content-type-options"] == "nosniff"

    def test_rate_limit_headers(self):
        """Тест: заголовки X-RateLimit-* в обычном ответе"""
        client = TestClient(create_app(rate_limit_max=5))
        response = client.get("/health")
        assert response.headers["x-ratelimit-limit"] == "5"
        assert response.headers["x-ratelimit-remaining"] == "4"


class TestSecurityAndCompression:
    """Тесты для заголовков безопасности и gzip"""

    @pytest.fixture
    def client(self):
        return TestClient(create_app(rate_limit_max=1000))

    @pytest.mark.parametrize("path", ["/health", "/api/users/2", "/api/users/abc", "/foo"])
    def test_security_headers(self, client, path):
        """Тест: заголовки безопасности на любых ответах"""
        response = client.get(path)
        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value

    def test_large_response_is_gzipped(self, client):
        """Тест: большой ответ сжимается gzip"""
        response = client.get("/api/users/50", headers={"Accept-Encoding": "gzip"})
        assert response.status_code == 200
        assert response.headers["content-encoding"] == "gzip"
        assert len(response.json()) == 50

    def test_small_response_not_gzipped(self, client):
        """Тест: маленький ответ не сжимается"""
        response = client.get("/health", headers={"Accept-Encoding": "gzip"})
        assert "content-encoding" not in response.headers


class TestAccessLog:
    """Тесты для access-лога"""

    def test_logs_in_development(self, caplog):
        """Тест: в development каждый запрос пишется в лог"""
        client = TestClient(create_app(rate_limit_max=1000, access_log=True))
        with caplog.at_level(logging.INFO, logger="userstub.access"):
            client.get("/api/users/2")
        messages = [r.getMessage() for r in caplog.records if r.name == "userstub.access"]
        assert len(messages) == 1
        assert messages[0].startswith("GET /api/users/2 200 ")

    def test_silent_by_default(self, caplog):
        """Тест: без development access-лог не пишется"""
        client = TestClient(create_app(rate_limit_max=1000, access_log=False))
        with caplog.at_level(logging.INFO, logger="userstub.access"):
            client.get("/health")
        assert not [r for r in caplog.records if r.name == "userstub.access"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
