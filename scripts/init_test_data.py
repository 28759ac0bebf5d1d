"""Скрипт для инициализации тестовых данных."""
import sys
from pathlib import Path

# Добавляем корневую директорию в путь
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.config import get_settings
from app.database import Database
from app.models.user import ROLE_ADMIN, ROLE_PUBLISHER, ROLE_USER
from app.schemas.book import BookCreate
from app.schemas.house import HouseCreate
from app.schemas.review import ReviewCreate
from app.services.auth import create_user, get_user_by_username
from app.services.books import BookService
from app.services.houses import HouseService
from app.services.reviews import ReviewService


def init_test_data():
    """Инициализировать тестовые данные."""
    database = Database(get_settings().DATABASE_URL)
    database.create_all()
    db = database.session()
    try:
        users = {}
        for username, role in (("admin", ROLE_ADMIN), ("publisher", ROLE_PUBLISHER), ("reader", ROLE_USER)):
            users[role] = get_user_by_username(db, username) or create_user(db, username, "password123", role)
        print(f"Пользователи: {', '.join(sorted(u.username for u in users.values()))}")

        houses = HouseService(db)
        house = houses.create(
            HouseCreate(
                name="Oak Hall",
                description="Тихий дом с библиотекой",
                website="https://oakhall.example.com",
                phone="+7 900 000-00-00",
                email="info@oakhall.example.com",
                address="г. Москва, ул. Солнечная, д. 1",
                housing=True
            ),
            users[ROLE_PUBLISHER]
        )
        print(f"Создан дом: {house.name} ({house.slug})")

        books = BookService(db)
        for title, author in (("Мастер и Маргарита", "М. Булгаков"), ("Пикник на обочине", "А. и Б. Стругацкие")):
            books.create(
                house.id,
                BookCreate(title=title, description="Из библиотеки дома", author=author, rating=9),
                users[ROLE_PUBLISHER]
            )
        print(f"Создано книг: {len(books.list_by_house(house.id))}")

        ReviewService(db).create(
            house.id,
            ReviewCreate(title="Отличное место", text="Уютно и тихо", rating=8),
            users[ROLE_USER]
        )
        db.refresh(house)
        print(f"Средний рейтинг дома: {house.average_rating}")

        print("Инициализация тестовых данных завершена")

    except Exception as e:
        print(f"Ошибка при инициализации данных: {e}")
        db.rollback()
    finally:
        db.close()


if __name__ == "__main__":
    init_test_data()
