"""Модели ответа API пользователей"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class UserRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    avatar: str
    departments: List[str] = Field(min_length=1, max_length=3)
    user_id: str = Field(alias="userId")


class HealthResponse(BaseModel):
    status: str
    uptime: str
    timestamp: str
