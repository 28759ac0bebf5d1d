"""Модель отзыва о доме."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint, Index, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Review(Base):
    """Модель отзыва. Один отзыв на пару (дом, пользователь)."""

    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    text = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    house_id = Column(Integer, ForeignKey("houses.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    # Связи
    house = relationship("House")

    __table_args__ = (
        UniqueConstraint('house_id', 'user_id', name='uq_review_house_user'),
        CheckConstraint('rating >= 1 AND rating <= 10', name='ck_review_rating_range'),
        Index('idx_review_house', 'house_id'),
    )

    def __repr__(self):
        return f"<Review(id={self.id}, house_id={self.house_id}, user_id={self.user_id}, rating={self.rating})>"
