"""Pydantic схемы для домов."""
import re
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

WEBSITE_RE = re.compile(
    r"^https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b([-a-zA-Z0-9()@:%_+.~#?&/=]*)$"
)
EMAIL_RE = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.\w{2,}$")


def _check_website(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    if not WEBSITE_RE.match(value):
        raise ValueError("Укажите корректный URL с HTTP или HTTPS")
    return value


def _check_email(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    if not EMAIL_RE.match(value):
        raise ValueError("Укажите корректный email")
    return value


class HouseBase(BaseModel):
    """Базовая схема дома."""
    name: str = Field(..., min_length=1, max_length=50, description="Название дома")
    description: str = Field(..., min_length=1, max_length=500, description="Описание")
    website: Optional[str] = Field(None, max_length=500, description="Сайт (http/https)")
    phone: Optional[str] = Field(None, max_length=20, description="Телефон")
    email: Optional[str] = Field(None, max_length=255, description="Email")
    address: str = Field(..., min_length=1, max_length=500, description="Адрес дома")
    housing: bool = Field(False, description="Есть проживание")
    accept_gi: bool = Field(False, description="Принимает GI Bill")

    @field_validator("name", "description", "address", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("website")
    @classmethod
    def validate_website(cls, value):
        return _check_website(value)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return _check_email(value)


class HouseCreate(HouseBase):
    """Схема для создания дома."""
    pass


class HouseUpdate(BaseModel):
    """Схема для обновления дома: те же ограничения, все поля необязательны."""
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    website: Optional[str] = Field(None, max_length=500)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    housing: Optional[bool] = None
    accept_gi: Optional[bool] = None

    @field_validator("name", "description", "address", mode="before")
    @classmethod
    def strip_text(cls, value):
        if value is None:
            raise ValueError("Поле не может быть пустым")
        return value.strip() if isinstance(value, str) else value

    @field_validator("housing", "accept_gi", mode="before")
    @classmethod
    def reject_null_flags(cls, value):
        if value is None:
            raise ValueError("Поле не может быть пустым")
        return value

    @field_validator("website")
    @classmethod
    def validate_website(cls, value):
        return _check_website(value)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return _check_email(value)


class HouseSummary(BaseModel):
    """Краткие данные дома для вложения в книги и отзывы."""
    id: int
    name: str
    description: str

    class Config:
        from_attributes = True


class HouseResponse(HouseBase):
    """Схема ответа с данными дома."""
    id: int
    slug: str
    average_rating: Optional[float] = None
    photo: str
    owner_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
