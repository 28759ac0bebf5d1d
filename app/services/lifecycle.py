"""Правила жизненного цикла агрегата дом / книги / отзывы.

Общие для всех обработчиков проверки и побочные эффекты:
- проверка владельца ресурса (или администратора);
- не более одного дома на владельца-не-админа;
- каскадное удаление книг и отзывов вместе с домом;
- пересчет среднего рейтинга дома после изменения отзывов.

Функции не делают commit: вызывающий сервис фиксирует основную запись
и побочные эффекты одной транзакцией.
"""
import logging
from typing import Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ForbiddenError, ConflictError
from app.models.book import Book
from app.models.house import House
from app.models.review import Review
from app.models.user import User

logger = logging.getLogger(__name__)


def authorize_mutation(actor: User, resource_owner_id: int, resource_id=None, action: str = "изменять") -> None:
    """Разрешить изменение, только если actor - владелец или администратор."""
    if actor.is_admin or actor.id == resource_owner_id:
        return
    logger.info(f"Пользователь {actor.id} не владелец ресурса {resource_id} (владелец {resource_owner_id})")
    raise ForbiddenError(
        f"Пользователь {actor.id} не имеет права {action} ресурс {resource_id}",
        resource_id=resource_id,
        actor_id=actor.id
    )


def enforce_single_house_ownership(db: Session, actor: User) -> None:
    """Проверить, что не-админ еще не опубликовал дом."""
    if actor.is_admin:
        return
    existing = db.query(House.id).filter(House.owner_id == actor.id).first()
    if existing:
        raise ConflictError(f"Пользователь с ID {actor.id} уже опубликовал дом")


def exclusive_owner_slot(actor: User) -> Optional[int]:
    """Значение уникальной колонки exclusive_owner_id для нового дома."""
    return None if actor.is_admin else actor.id


def list_books_by_house(db: Session, house_id: int) -> List[Book]:
    """Все книги дома."""
    return db.query(Book).filter(Book.house_id == house_id).order_by(Book.id).all()


def list_books_by_houses(db: Session, house_ids: List[int]) -> Dict[int, List[Book]]:
    """Книги нескольких домов одним запросом, сгруппированные по ID дома."""
    grouped = {house_id: [] for house_id in house_ids}
    if not house_ids:
        return grouped
    books = db.query(Book).filter(Book.house_id.in_(house_ids)).order_by(Book.id).all()
    for book in books:
        grouped[book.house_id].append(book)
    return grouped


def list_reviews_by_house(db: Session, house_id: int) -> List[Review]:
    """Все отзывы о доме."""
    return db.query(Review).filter(Review.house_id == house_id).order_by(Review.id).all()


def cascade_delete_house(db: Session, house_id: int) -> dict:
    """Удалить зависимые книги и отзывы дома (до удаления самого дома)."""
    books_deleted = db.query(Book).filter(Book.house_id == house_id).delete(synchronize_session=False)
    reviews_deleted = db.query(Review).filter(Review.house_id == house_id).delete(synchronize_session=False)
    logger.info(f"Каскадное удаление для дома {house_id}: книг {books_deleted}, отзывов {reviews_deleted}")
    return {"books": books_deleted, "reviews": reviews_deleted}


def house_lock_query(db: Session, house_id: int):
    """SELECT ... FOR UPDATE строки дома."""
    return db.query(House.id).filter(House.id == house_id).with_for_update()


def recompute_house_average_rating(db: Session, house_id: int) -> Optional[float]:
    """
    Пересчитать средний рейтинг дома по его отзывам.

    Сначала блокирует строку дома: параллельные изменения отзывов одного дома
    пересчитывают среднее по очереди, и каждая следующая транзакция видит
    отзывы, зафиксированные предыдущей.
    Группирует отзывы по дому и берет среднее для нужной группы.
    Если отзывов не осталось, рейтинг сбрасывается в NULL.
    """
    house_lock_query(db, house_id).first()

    row = (
        db.query(Review.house_id, func.avg(Review.rating))
        .filter(Review.house_id == house_id)
        .group_by(Review.house_id)
        .first()
    )
    average = float(row[1]) if row is not None else None

    db.query(House).filter(House.id == house_id).update(
        {House.average_rating: average}, synchronize_session=False
    )
    logger.debug(f"Средний рейтинг дома {house_id}: {average}")
    return average


def commit_or_conflict(db: Session, conflict_message: str) -> None:
    """Зафиксировать транзакцию; нарушение уникальности превращается в ConflictError."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Нарушение уникальности при коммите: {e.orig}")
        raise ConflictError(conflict_message) from e
    except Exception as e:
        logger.error(f"Ошибка при коммите: {e}")
        db.rollback()
        raise
