"""Главный файл приложения FastAPI."""
from contextlib import asynccontextmanager
from typing import Optional
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from app.config import Settings, get_settings
from app.database import Database
from app.api import auth, houses, books, reviews
from app.api.errors import register_error_handlers

# Настройка логирования
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения."""
    # Startup
    logger.info("Запуск приложения")

    # Создаем таблицы в БД (если еще не созданы)
    try:
        app.state.database.create_all()
        logger.info("Таблицы БД проверены/созданы")
    except Exception as e:
        logger.error(f"Ошибка при создании таблиц: {e}")
        raise

    yield

    # Shutdown
    logger.info("Остановка приложения")
    app.state.database.dispose()


def install_openapi(app: FastAPI, settings: Settings):
    """OpenAPI схема, в которой tokenUrl учитывает префикс API этого приложения."""

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes
        )
        security_schemes = schema.get("components", {}).get("securitySchemes", {})
        for scheme in security_schemes.values():
            password_flow = scheme.get("flows", {}).get("password")
            if password_flow is not None:
                password_flow["tokenUrl"] = f"{settings.API_V1_PREFIX}/auth/login"
        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Собрать приложение с указанными настройками и своим клиентом БД."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Houses Service",
        description="API домов, их книг и отзывов с правами владельцев",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = Database(settings.DATABASE_URL)

    # Настройка CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # В продакшене указать конкретные домены
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Подключаем роуты
    app.include_router(auth.router, prefix=settings.API_V1_PREFIX)
    app.include_router(houses.router, prefix=settings.API_V1_PREFIX)
    app.include_router(books.router, prefix=settings.API_V1_PREFIX)
    app.include_router(reviews.router, prefix=settings.API_V1_PREFIX)

    install_openapi(app, settings)

    @app.get("/")
    async def root():
        """Корневой endpoint."""
        return {
            "message": "Houses Service API",
            "version": "1.0.0",
            "docs": "/docs"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
