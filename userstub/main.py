"""Главный файл приложения FastAPI"""
import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from userstub import config
from userstub.middleware.access_log import AccessLogMiddleware
from userstub.middleware.errors import ErrorHandlingMiddleware, internal_error_response
from userstub.middleware.rate_limit import RateLimitMiddleware, SlidingWindowLimiter
from userstub.middleware.security import SecurityHeadersMiddleware
from userstub.routers import docs, health, users

# Настройка логирования
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """HTTP-ошибки отдаём как {"error": ...}; неизвестный маршрут или метод — 404"""
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "Not Found"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Последний рубеж: ошибки в самих middleware. Детали только в лог"""
    logger.error(f"Internal server error: {str(exc)}", exc_info=exc)
    return internal_error_response()


def create_app(
    max_user_count: Optional[int] = config.MAX_USER_COUNT,
    rate_limit_max: int = config.RATE_LIMIT_MAX,
    rate_limit_window_seconds: float = config.RATE_LIMIT_WINDOW_SECONDS,
    random_seed: Optional[int] = config.RANDOM_SEED,
    access_log: bool = config.IS_DEVELOPMENT,
) -> FastAPI:
    app = FastAPI(
        title="User Stub API",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.started_at = time.monotonic()
    app.state.max_user_count = max_user_count
    app.state.random_seed = random_seed
    app.state.limiter = SlidingWindowLimiter(rate_limit_max, rate_limit_window_seconds)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Последний добавленный middleware — внешний
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RateLimitMiddleware, limiter=app.state.limiter)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(SecurityHeadersMiddleware)
    if access_log:
        app.add_middleware(AccessLogMiddleware)

    # Подключение роутеров
    app.include_router(docs.router)
    app.include_router(health.router)
    app.include_router(users.router)

    # Статический OpenAPI-документ для Swagger UI
    app.mount("/static", StaticFiles(directory=str(config.STATIC_DIR)), name="static")

    logger.info(
        f"App created: env={config.APP_ENV}, max_user_count={max_user_count}, "
        f"rate_limit={rate_limit_max}/{rate_limit_window_seconds}s"
    )
    return app


app = create_app()


def run() -> None:
    """Запуск uvicorn с HOST/PORT из конфигурации"""
    import uvicorn

    logger.info(f"Server is running on port {config.PORT}")
    uvicorn.run("userstub.main:app", host=config.HOST, port=config.PORT, server_header=False)
