"""Pydantic схемы для книг."""
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import List, Optional
from app.schemas.house import HouseResponse, HouseSummary


class BookBase(BaseModel):
    """Базовая схема книги."""
    title: str = Field(..., min_length=1, max_length=255, description="Название книги")
    description: str = Field(..., min_length=1, description="Описание")
    author: str = Field(..., min_length=1, max_length=255, description="Автор")
    rating: int = Field(..., ge=1, le=10, description="Оценка от 1 до 10")

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        return value.strip() if isinstance(value, str) else value


class BookCreate(BookBase):
    """Схема для создания книги."""
    pass


class BookUpdate(BaseModel):
    """Схема для обновления книги."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    author: Optional[str] = Field(None, min_length=1, max_length=255)
    rating: Optional[int] = Field(None, ge=1, le=10)

    @field_validator("title", "description", "author", "rating", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Поле не может быть пустым")
        return value.strip() if isinstance(value, str) else value


class BookResponse(BookBase):
    """Схема ответа с данными книги."""
    id: int
    house_id: int
    user_id: int
    created_at: Optional[datetime] = None
    house: Optional[HouseSummary] = None

    class Config:
        from_attributes = True


class BookSummary(BaseModel):
    """Краткие данные книги для вложения в список домов."""
    id: int
    title: str
    author: str
    rating: int

    class Config:
        from_attributes = True


class HouseWithBooksResponse(HouseResponse):
    """Дом вместе с его книгами (список домов)."""
    books: List[BookSummary] = []
