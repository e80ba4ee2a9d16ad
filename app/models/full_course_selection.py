"""One full-course slot assignment for an owner."""

import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, func

from app.db.base import Base


class FullCourseSelection(Base):
    """
    Maps one slot of the full-course menu (appetizer, soup, ...) to a ranking item.

    There is at most one row per (owner_key, slot_key). A NULL ranking_item_id
    means the slot was explicitly cleared.
    """

    __tablename__ = "full_course_selections"
    __table_args__ = (
        UniqueConstraint("owner_key", "slot_key", name="uq_full_course_selections_owner_slot"),
    )

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_key = Column(String(64), nullable=False, index=True)
    slot_key = Column(String(32), nullable=False)
    ranking_item_id = Column(String(64), ForeignKey("ranking_items.id", ondelete="SET NULL"), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
