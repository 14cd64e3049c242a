"""
Сервис пользователей — генерация синтетических записей для тестовых данных.
Ничего не хранит: каждая запись создаётся заново и живёт только в рамках ответа.
"""
from __future__ import annotations

import logging
import random
import threading
import uuid
from typing import Sequence

from faker import Faker

from userstub.models.users import UserRecord
from userstub.services.departments import sample_departments

logger = logging.getLogger(__name__)

AVATAR_URL_TEMPLATE = "https://avatars.githubusercontent.com/u/{}"
MAX_AVATAR_ID = 100_000_000

# Один экземпляр Faker на процесс: провайдеры загружаются один раз.
# На время генерации его источник случайности подменяется на rng вызова,
# поэтому доступ под блокировкой.
_fake = Faker("en_US")
_fake_lock = threading.Lock()


def _make_user_id(rng: random.Random) -> str:
    """UUID v4 из 128 бит rng"""
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def generate_users(count: int, catalog: Sequence[str], rng: random.Random) -> list[UserRecord]:
    """
    Генерирует count независимых пользователей.

    Верхняя граница count здесь не проверяется — это решение уровня API.

    Args:
        count: Количество пользователей
        catalog: Каталог отделов для выборки
        rng: Источник случайности (с фиксированным seed результат воспроизводим)

    Returns:
        Список пользователей в порядке генерации
    """
    users = []
    with _fake_lock:
        previous = _fake.random
        _fake.random = rng
        try:
            for _ in range(count):
                users.append(
                    UserRecord(
                        name=_fake.name(),
                        avatar=AVATAR_URL_TEMPLATE.format(_fake.random_int(min=1, max=MAX_AVATAR_ID)),
                        departments=sample_departments(catalog, rng),
                        user_id=_make_user_id(rng),
                    )
                )
        finally:
            _fake.random = previous
    logger.debug("generate_users called, count=%s", count)
    return users
