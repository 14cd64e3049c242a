"""Конфигурация приложения"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Сетевые настройки
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# Режим окружения: в development включается access-лог
APP_ENV = os.getenv("APP_ENV", "production").lower()
IS_DEVELOPMENT = APP_ENV == "development"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Максимальное количество пользователей за один запрос (0 — без ограничения)
MAX_USER_COUNT = int(os.getenv("MAX_USER_COUNT", "1000"))

# Rate limiting: не более RATE_LIMIT_MAX запросов с одного IP за окно
RATE_LIMIT_MAX = int(os.getenv("RATE_LIMIT_MAX", "100"))
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", str(15 * 60)))

# Фиксированный seed для воспроизводимых ответов (по умолчанию не задан)
_seed = os.getenv("RANDOM_SEED")
RANDOM_SEED = int(_seed) if _seed else None

# Статика: OpenAPI-документ для Swagger UI
STATIC_DIR = Path(__file__).resolve().parent / "static"
OPENAPI_DOCUMENT = "openapi.json"
