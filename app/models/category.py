import uuid
from sqlalchemy import Column, String, Text, DateTime, func
from sqlalchemy.orm import relationship

from app.db.base import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)  # user-editable; uniqueness is not enforced
    image_url = Column(Text, nullable=True)  # image of the current rank-1 item, NULL when empty
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    ranking_items = relationship("RankingItem", back_populates="category", cascade="all, delete-orphan")
