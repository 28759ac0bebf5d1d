"""Сервис домов."""
import logging
from pathlib import Path
from sqlalchemy.orm import Session

from app.config import Settings
from app.exceptions import ConflictError, NotFoundError, UploadError
from app.models.house import House
from app.models.user import User
from app.schemas.house import HouseCreate, HouseUpdate
from app.services import lifecycle
from app.utils.slug import make_slug

logger = logging.getLogger(__name__)


class HouseService:
    """Создание, чтение, изменение и удаление домов."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, house_id: int) -> House:
        house = self.db.query(House).filter(House.id == house_id).first()
        if not house:
            raise NotFoundError(f"Дом с ID {house_id} не найден", house_id)
        return house

    def _ensure_name_free(self, name: str, exclude_id: int = None):
        query = self.db.query(House.id).filter(House.name == name)
        if exclude_id is not None:
            query = query.filter(House.id != exclude_id)
        if query.first():
            raise ConflictError(f"Дом с названием '{name}' уже существует")

    def create(self, payload: HouseCreate, actor: User) -> House:
        """
        Создать дом от имени actor.

        Не-админ может опубликовать только один дом: проверка заранее дает
        понятную ошибку, а уникальная колонка exclusive_owner_id закрывает гонку
        двух одновременных запросов.
        """
        lifecycle.enforce_single_house_ownership(self.db, actor)
        self._ensure_name_free(payload.name)

        house = House(
            **payload.model_dump(),
            slug=make_slug(payload.name),
            owner_id=actor.id,
            exclusive_owner_id=lifecycle.exclusive_owner_slot(actor)
        )
        self.db.add(house)
        lifecycle.commit_or_conflict(
            self.db, f"Дом с таким названием уже существует или пользователь {actor.id} уже опубликовал дом"
        )
        self.db.refresh(house)

        logger.info(f"Создан дом {house.id} '{house.name}' пользователем {actor.id}")
        return house

    def update(self, house_id: int, payload: HouseUpdate, actor: User) -> House:
        house = self.get(house_id)
        lifecycle.authorize_mutation(actor, house.owner_id, house.id, "изменять дом")

        data = payload.model_dump(exclude_unset=True)
        if "name" in data and data["name"] != house.name:
            self._ensure_name_free(data["name"], exclude_id=house.id)
        for field, value in data.items():
            setattr(house, field, value)
        house.slug = make_slug(house.name)

        lifecycle.commit_or_conflict(self.db, f"Дом с названием '{house.name}' уже существует")
        self.db.refresh(house)

        logger.info(f"Обновлен дом {house.id}: {sorted(data)}")
        return house

    def delete(self, house_id: int, actor: User) -> None:
        """Удалить дом вместе с его книгами и отзывами одной транзакцией."""
        house = self.get(house_id)
        lifecycle.authorize_mutation(actor, house.owner_id, house.id, "удалять дом")

        try:
            lifecycle.cascade_delete_house(self.db, house.id)
            self.db.delete(house)
            self.db.commit()
        except Exception as e:
            logger.error(f"Ошибка при удалении дома {house_id}: {e}")
            self.db.rollback()
            raise

        logger.info(f"Удален дом {house_id} пользователем {actor.id}")

    def upload_photo(
        self,
        house_id: int,
        actor: User,
        filename: str,
        content_type: str,
        content: bytes,
        settings: Settings
    ) -> str:
        """Сохранить фото дома на диск и записать имя файла в дом."""
        house = self.get(house_id)
        lifecycle.authorize_mutation(actor, house.owner_id, house.id, "изменять дом")

        if not content_type or not content_type.startswith("image"):
            raise UploadError("Загрузите файл изображения")
        if len(content) > settings.MAX_FILE_UPLOAD:
            raise UploadError(f"Загрузите изображение меньше {settings.MAX_FILE_UPLOAD} байт")

        photo_name = f"photo_{house.id}{Path(filename or '').suffix}"
        upload_dir = Path(settings.FILE_UPLOAD_PATH)
        try:
            upload_dir.mkdir(parents=True, exist_ok=True)
            (upload_dir / photo_name).write_bytes(content)
        except OSError as e:
            logger.error(f"Не удалось сохранить фото дома {house.id}: {e}")
            raise UploadError("Проблема с загрузкой файла", status_code=500) from e

        house.photo = photo_name
        lifecycle.commit_or_conflict(self.db, "Не удалось обновить фото дома")

        logger.info(f"Загружено фото {photo_name} для дома {house.id}")
        return photo_name
