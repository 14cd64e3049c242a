"""Зависимости FastAPI: источник случайности и лимит count берутся из app.state"""
import random
from typing import Optional

from fastapi import Request


def get_rng(request: Request) -> random.Random:
    """Новый генератор на каждый запрос — между запросами состояние не разделяется."""
    return random.Random(request.app.state.random_seed)


def get_max_count(request: Request) -> Optional[int]:
    return request.app.state.max_user_count
