"""Роутер для генерации пользователей"""
import logging
import random
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from userstub.dependencies import get_max_count, get_rng
from userstub.models.users import UserRecord
from userstub.services.departments import DEPARTMENTS
from userstub.services.users import generate_users
from userstub.services.validation import InvalidCountError, parse_count

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/users/{count}", response_model=List[UserRecord])
async def get_users(
    count: str,
    rng: random.Random = Depends(get_rng),
    max_count: Optional[int] = Depends(get_max_count),
):
    """
    Возвращает count случайно сгенерированных пользователей

    Args:
        count: Количество пользователей (положительное целое число)

    Returns:
        Список пользователей с именем, аватаром, отделами и userId
    """
    try:
        parsed = parse_count(count, max_count)
    except InvalidCountError as e:
        logger.info(f"Rejected users request: count={count!r}")
        raise HTTPException(status_code=400, detail=e.message)

    try:
        return generate_users(parsed, DEPARTMENTS, rng)
    except Exception as e:
        logger.error(f"Unexpected error generating users: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")
