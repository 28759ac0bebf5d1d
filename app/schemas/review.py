"""Pydantic схемы для отзывов."""
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional
from app.schemas.house import HouseSummary


class ReviewBase(BaseModel):
    """Базовая схема отзыва."""
    title: str = Field(..., min_length=1, max_length=100, description="Заголовок отзыва")
    text: str = Field(..., min_length=1, description="Текст отзыва")
    rating: int = Field(..., ge=1, le=10, description="Оценка от 1 до 10")

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        return value.strip() if isinstance(value, str) else value


class ReviewCreate(ReviewBase):
    """Схема для создания отзыва."""
    pass


class ReviewUpdate(BaseModel):
    """Схема для обновления отзыва."""
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    text: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=10)

    @field_validator("title", "text", "rating", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Поле не может быть пустым")
        return value.strip() if isinstance(value, str) else value


class ReviewResponse(ReviewBase):
    """Схема ответа с данными отзыва."""
    id: int
    house_id: int
    user_id: int
    created_at: Optional[datetime] = None
    house: Optional[HouseSummary] = None

    class Config:
        from_attributes = True
