from pydantic import BaseModel
from typing import Optional


class FullCourseSlotRead(BaseModel):
    key: str
    label: str
    emoji: str


class FullCourseSlotUpdate(BaseModel):
    ranking_item_id: Optional[str] = None
