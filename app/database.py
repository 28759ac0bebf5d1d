"""Подключение к базе данных."""
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def create_db_engine(database_url: str):
    """Создать engine под указанный URL."""
    if database_url.startswith("sqlite"):
        # In-memory SQLite живёт, пока жив единственный коннект
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False
        )
    return create_engine(
        database_url,
        pool_pre_ping=True,
        echo=False  # Установить True для логирования SQL-запросов
    )


class Database:
    """Клиент БД: engine и фабрика сессий одного приложения."""

    def __init__(self, database_url: str):
        self.engine = create_db_engine(database_url)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self):
        """Создать таблицы (если еще не созданы)."""
        # Импорт регистрирует модели в метаданных
        import app.models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    """Dependency для получения сессии БД."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
