"""
Каталог отделов и случайная выборка отделов для пользователя.
"""
from __future__ import annotations

import random
from typing import Sequence

DEPARTMENTS: tuple[str, ...] = (
    "Hardware",
    "Plumbing",
    "Flooring",
    "Paint",
    "Millwork",
    "Building Material",
    "Electrical",
    "Home Decor",
    "Inside Lawn & Garden",
    "Outside Lawn & Garden",
    "Appliances",
    "Cabinets",
    "Pro Department",
)

MIN_DEPARTMENTS = 1
MAX_DEPARTMENTS = 3


def sample_departments(catalog: Sequence[str], rng: random.Random) -> list[str]:
    """
    Выбирает от 1 до 3 различных отделов из каталога (без повторений).

    Args:
        catalog: Каталог отделов
        rng: Источник случайности

    Returns:
        Список выбранных отделов, порядок не имеет значения
    """
    k = rng.randint(MIN_DEPARTMENTS, MAX_DEPARTMENTS)
    return rng.sample(list(catalog), min(k, len(catalog)))
