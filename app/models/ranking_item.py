from sqlalchemy import Column, String, Integer, Float, Text, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from app.db.base import Base


class RankingItem(Base):
    __tablename__ = "ranking_items"

    # Assigned by the caller before the first save; never changes afterwards
    id = Column(String(64), primary_key=True)
    category_id = Column(String(64), ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    score = Column(Float, nullable=False, index=True)  # 0.00 - 5.00
    eaten_at = Column(Date, nullable=False, index=True)
    comment = Column(Text, nullable=False, default="")
    image_url = Column(Text, nullable=True)  # URL or data: URI, stored verbatim
    rank = Column(Integer, nullable=True)  # derived from score order within the category
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    category = relationship("Category", back_populates="ranking_items")
