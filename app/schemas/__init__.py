"""Pydantic схемы для валидации."""
from app.schemas.common import DataResponse, ListResponse, PaginatedResponse, Pagination, PageRef, EmptyResponse, MessageResponse
from app.schemas.house import HouseBase, HouseCreate, HouseUpdate, HouseSummary, HouseResponse
from app.schemas.book import BookBase, BookCreate, BookUpdate, BookResponse, BookSummary, HouseWithBooksResponse
from app.schemas.review import ReviewBase, ReviewCreate, ReviewUpdate, ReviewResponse
from app.schemas.auth import Token, UserCreate, UserResponse

__all__ = [
    "DataResponse",
    "ListResponse",
    "PaginatedResponse",
    "Pagination",
    "PageRef",
    "EmptyResponse",
    "MessageResponse",
    "HouseBase",
    "HouseCreate",
    "HouseUpdate",
    "HouseSummary",
    "HouseResponse",
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "BookSummary",
    "HouseWithBooksResponse",
    "ReviewBase",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "Token",
    "UserCreate",
    "UserResponse",
]
