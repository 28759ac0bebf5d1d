"""Сервис отзывов."""
import logging
from typing import List
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError
from app.models.review import Review
from app.models.user import User
from app.schemas.review import ReviewCreate, ReviewUpdate
from app.services import lifecycle
from app.services.houses import HouseService

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Отзывы о домах.

    Каждое создание, изменение и удаление отзыва пересчитывает средний
    рейтинг дома в той же транзакции, что и сам отзыв.
    """

    def __init__(self, db: Session):
        self.db = db
        self.houses = HouseService(db)

    def list_by_house(self, house_id: int) -> List[Review]:
        return lifecycle.list_reviews_by_house(self.db, house_id)

    def get(self, review_id: int) -> Review:
        review = self.db.query(Review).filter(Review.id == review_id).first()
        if not review:
            raise NotFoundError(f"Отзыв с ID {review_id} не найден", review_id)
        return review

    def create(self, house_id: int, payload: ReviewCreate, actor: User) -> Review:
        house = self.houses.get(house_id)

        duplicate = self.db.query(Review.id).filter(
            Review.house_id == house.id,
            Review.user_id == actor.id
        ).first()
        if duplicate:
            raise ConflictError(f"Пользователь {actor.id} уже оставил отзыв о доме {house.id}")

        review = Review(**payload.model_dump(), house_id=house.id, user_id=actor.id)
        self.db.add(review)
        self.db.flush()
        lifecycle.recompute_house_average_rating(self.db, house.id)
        lifecycle.commit_or_conflict(
            self.db, f"Пользователь {actor.id} уже оставил отзыв о доме {house.id}"
        )
        self.db.refresh(review)

        logger.info(f"Создан отзыв {review.id} о доме {house.id} пользователем {actor.id}")
        return review

    def update(self, review_id: int, payload: ReviewUpdate, actor: User) -> Review:
        review = self.get(review_id)
        lifecycle.authorize_mutation(actor, review.user_id, review.id, "изменять отзыв")

        data = payload.model_dump(exclude_unset=True)
        for field, value in data.items():
            setattr(review, field, value)
        self.db.flush()
        lifecycle.recompute_house_average_rating(self.db, review.house_id)
        lifecycle.commit_or_conflict(self.db, "Не удалось сохранить отзыв")
        self.db.refresh(review)

        logger.info(f"Обновлен отзыв {review.id}: {sorted(data)}")
        return review

    def delete(self, review_id: int, actor: User) -> None:
        review = self.get(review_id)
        lifecycle.authorize_mutation(actor, review.user_id, review.id, "удалять отзыв")

        house_id = review.house_id
        self.db.delete(review)
        self.db.flush()
        lifecycle.recompute_house_average_rating(self.db, house_id)
        lifecycle.commit_or_conflict(self.db, "Не удалось удалить отзыв")
        logger.info(f"Удален отзыв {review_id} пользователем {actor.id}")
