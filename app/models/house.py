"""Модель дома."""
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

DEFAULT_PHOTO = "no-photo.jpg"


class House(Base):
    """Модель дома."""

    __tablename__ = "houses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True)
    slug = Column(String(100), nullable=False, index=True)
    description = Column(String(500), nullable=False)
    website = Column(String(500), nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    address = Column(String(500), nullable=False)
    average_rating = Column(Float, nullable=True, comment="Средний рейтинг по отзывам")
    photo = Column(String(255), nullable=False, default=DEFAULT_PHOTO)
    housing = Column(Boolean, nullable=False, default=False)
    accept_gi = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    # Заполняется только для владельцев-не-админов: уникальность = один дом на владельца.
    # NULL не конфликтует, поэтому админ может владеть несколькими домами.
    exclusive_owner_id = Column(Integer, nullable=True, unique=True)

    # Связи
    owner = relationship("User")

    __table_args__ = (
        Index('idx_house_owner', 'owner_id'),
    )

    def __repr__(self):
        return f"<House(id={self.id}, name='{self.name}', owner_id={self.owner_id})>"
