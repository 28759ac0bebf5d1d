"""Общие Pydantic схемы ответов."""
from pydantic import BaseModel
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Ответ с одной сущностью."""
    success: bool = True
    data: T


class ListResponse(BaseModel, Generic[T]):
    """Ответ со списком сущностей."""
    success: bool = True
    count: int
    data: List[T]


class PageRef(BaseModel):
    """Ссылка на соседнюю страницу."""
    page: int
    limit: int


class Pagination(BaseModel):
    """Соседние страницы выборки."""
    next: Optional[PageRef] = None
    prev: Optional[PageRef] = None


class PaginatedResponse(ListResponse[T], Generic[T]):
    """Ответ со страницей списка."""
    pagination: Pagination


class EmptyResponse(BaseModel):
    """Ответ на удаление."""
    success: bool = True
    data: dict = {}


class MessageResponse(BaseModel):
    """Ответ со строковым значением (например, именем файла)."""
    success: bool = True
    data: Any
