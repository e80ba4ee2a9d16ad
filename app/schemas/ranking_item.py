from pydantic import BaseModel, ConfigDict
from datetime import date
from typing import Any, Optional


class RankingItemRecord(BaseModel):
    """A ranking item as stored. `rank` is derived and may be unset right after an insert."""

    id: str
    category_id: str
    name: str
    score: float
    eaten_at: date
    comment: str = ""
    image_url: Optional[str] = None
    rank: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class RankingItemSave(BaseModel):
    """
    Payload for saving an item (create or update).

    Every field is optional here so that the save coordinator, not the HTTP
    layer, decides what is missing and reports it as a validation failure.
    `score` is taken as sent (number, numeric string or anything else) and
    checked there too, so JSON `true` is rejected instead of read as 1.0.
    """

    id: Optional[str] = None
    category_id: Optional[str] = None
    name: Optional[str] = None
    score: Any = None
    eaten_at: Optional[date] = None
    comment: Optional[str] = ""
    image_url: Optional[str] = None
    previous_category_id: Optional[str] = None


class CalendarDay(BaseModel):
    eaten_at: date
    cover: RankingItemRecord
    items: list[RankingItemRecord]
