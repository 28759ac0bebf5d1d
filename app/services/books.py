"""Сервис книг."""
import logging
from typing import List
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from app.models.book import Book
from app.models.user import User
from app.schemas.book import BookCreate, BookUpdate
from app.services import lifecycle
from app.services.houses import HouseService

logger = logging.getLogger(__name__)


class BookService:
    """Книги, привязанные к дому."""

    def __init__(self, db: Session):
        self.db = db
        self.houses = HouseService(db)

    def list_by_house(self, house_id: int) -> List[Book]:
        return lifecycle.list_books_by_house(self.db, house_id)

    def get(self, book_id: int) -> Book:
        book = self.db.query(Book).filter(Book.id == book_id).first()
        if not book:
            raise NotFoundError(f"Книга с ID {book_id} не найдена", book_id)
        return book

    def create(self, house_id: int, payload: BookCreate, actor: User) -> Book:
        """Добавить книгу в дом. Добавлять может владелец дома или админ."""
        house = self.houses.get(house_id)
        lifecycle.authorize_mutation(actor, house.owner_id, house.id, "добавлять книги в дом")

        book = Book(**payload.model_dump(), house_id=house.id, user_id=actor.id)
        self.db.add(book)
        lifecycle.commit_or_conflict(self.db, "Не удалось сохранить книгу")
        self.db.refresh(book)

        logger.info(f"Создана книга {book.id} в доме {house.id} пользователем {actor.id}")
        return book

    def update(self, book_id: int, payload: BookUpdate, actor: User) -> Book:
        book = self.get(book_id)
        lifecycle.authorize_mutation(actor, book.user_id, book.id, "изменять книгу")

        data = payload.model_dump(exclude_unset=True)
        for field, value in data.items():
            setattr(book, field, value)
        lifecycle.commit_or_conflict(self.db, "Не удалось сохранить книгу")
        self.db.refresh(book)

        logger.info(f"Обновлена книга {book.id}: {sorted(data)}")
        return book

    def delete(self, book_id: int, actor: User) -> None:
        book = self.get(book_id)
        lifecycle.authorize_mutation(actor, book.user_id, book.id, "удалять книгу")

        self.db.delete(book)
        lifecycle.commit_or_conflict(self.db, "Не удалось удалить книгу")
        logger.info(f"Удалена книга {book_id} пользователем {actor.id}")
