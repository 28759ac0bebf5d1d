"""Модели базы данных."""
from app.models.user import User
from app.models.house import House
from app.models.book import Book
from app.models.review import Review

__all__ = ["User", "House", "Book", "Review"]
