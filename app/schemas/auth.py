"""Pydantic схемы для авторизации."""
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional


class Token(BaseModel):
    """Схема токена."""
    access_token: str
    token_type: str


class UserCreate(BaseModel):
    """Схема регистрации пользователя. Роль admin назначить себе нельзя."""
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=6, max_length=128)
    role: Literal["user", "publisher"] = "user"


class UserResponse(BaseModel):
    """Схема ответа с данными пользователя."""
    id: int
    username: str
    role: str
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
