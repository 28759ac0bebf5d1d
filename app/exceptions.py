"""Типизированные ошибки сервисного слоя."""
from typing import Optional
from fastapi import status


class ServiceError(Exception):
    """Базовая ошибка: сообщение для клиента и HTTP статус."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(ServiceError):
    """Сущность с указанным ID не существует."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str, entity_id=None):
        super().__init__(message)
        self.entity_id = entity_id


class ForbiddenError(ServiceError):
    """Пользователь не владелец ресурса и не администратор."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str, resource_id=None, actor_id=None):
        super().__init__(message)
        self.resource_id = resource_id
        self.actor_id = actor_id


class ConflictError(ServiceError):
    """Нарушение уникальности (имя дома, один дом на владельца, один отзыв)."""

    status_code = status.HTTP_400_BAD_REQUEST


class ValidationFailedError(ServiceError):
    """Некорректные данные запроса."""

    status_code = status.HTTP_400_BAD_REQUEST


class UploadError(ServiceError):
    """Ошибка загрузки файла: тип, размер или запись на диск."""

    status_code = status.HTTP_400_BAD_REQUEST
