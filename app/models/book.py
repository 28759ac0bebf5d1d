"""Модель книги дома."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Book(Base):
    """Модель книги, привязанной к дому."""

    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    author = Column(String(255), nullable=False)
    rating = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    house_id = Column(Integer, ForeignKey("houses.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    # Связи
    house = relationship("House")

    __table_args__ = (
        CheckConstraint('rating >= 1 AND rating <= 10', name='ck_book_rating_range'),
        Index('idx_book_house', 'house_id'),
        Index('idx_book_user', 'user_id'),
    )

    def __repr__(self):
        return f"<Book(id={self.id}, title='{self.title}', house_id={self.house_id})>"
