"""Общие фикстуры тестов: приложение на in-memory SQLite и пользователи с ролями."""
import os

# Модульное приложение app.main.app не должно ходить в PostgreSQL
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import Database
from app.main import create_app
from app.models.house import House
from app.models.user import User, ROLE_ADMIN, ROLE_PUBLISHER, ROLE_USER
from app.services.auth import create_access_token, create_user

API = "/api/v1"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key",
        FILE_UPLOAD_PATH=str(tmp_path / "uploads"),
        MAX_FILE_UPLOAD=1024,
        DEFAULT_PAGE_LIMIT=25,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(app, client, settings):
    """Фабрика пользователей: возвращает id, имя и заголовок авторизации."""

    def factory(username: str, role: str = ROLE_USER):
        db = app.state.database.session()
        try:
            user = create_user(db, username, "password123", role)
            user_id = user.id
        finally:
            db.close()
        token = create_access_token({"sub": username}, settings)
        return SimpleNamespace(
            id=user_id,
            username=username,
            role=role,
            headers={"Authorization": f"Bearer {token}"},
        )

    return factory


@pytest.fixture
def publisher(make_user):
    return make_user("publisher1", ROLE_PUBLISHER)


@pytest.fixture
def other_publisher(make_user):
    return make_user("publisher2", ROLE_PUBLISHER)


@pytest.fixture
def admin(make_user):
    return make_user("admin", ROLE_ADMIN)


@pytest.fixture
def reader(make_user):
    return make_user("reader1", ROLE_USER)


def house_payload(name: str = "Oak Hall", **overrides) -> dict:
    payload = {
        "name": name,
        "description": "Тихий дом с библиотекой",
        "address": "г. Москва, ул. Солнечная, д. 1",
        "website": "https://oakhall.example.com",
        "email": "info@oakhall.example.com",
        "phone": "+7 900 000-00-00",
    }
    payload.update(overrides)
    return payload


def book_payload(title: str = "Пикник на обочине", **overrides) -> dict:
    payload = {
        "title": title,
        "description": "Из библиотеки дома",
        "author": "А. и Б. Стругацкие",
        "rating": 9,
    }
    payload.update(overrides)
    return payload


def review_payload(rating: int = 8, **overrides) -> dict:
    payload = {"title": "Отличное место", "text": "Уютно и тихо", "rating": rating}
    payload.update(overrides)
    return payload


@pytest.fixture
def house(client, publisher):
    """Дом, опубликованный publisher."""
    response = client.post(f"{API}/houses", json=house_payload(), headers=publisher.headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def database():
    """Отдельная БД для проверки сервисного слоя без HTTP."""
    db_client = Database("sqlite://")
    db_client.create_all()
    yield db_client
    db_client.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def users(db):
    """Пользователи без bcrypt: для тестов сервисов хэш не важен."""
    created = {}
    for username, role in (("owner", ROLE_PUBLISHER), ("stranger", ROLE_PUBLISHER),
                           ("boss", ROLE_ADMIN), ("reader", ROLE_USER), ("reader2", ROLE_USER)):
        user = User(username=username, hashed_password="x", role=role, is_active=True)
        db.add(user)
        created[username] = user
    db.commit()
    for user in created.values():
        db.refresh(user)
    return created


@pytest.fixture
def db_house(db, users):
    house = House(
        name="Oak Hall",
        slug="oak-hall",
        description="Тихий дом",
        address="г. Москва",
        owner_id=users["owner"].id,
        exclusive_owner_id=users["owner"].id,
    )
    db.add(house)
    db.commit()
    db.refresh(house)
    return house
