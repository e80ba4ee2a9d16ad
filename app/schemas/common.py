from pydantic import BaseModel
from typing import Optional

from app.core.errors import RankingError
from app.schemas.category import CategoryRecord
from app.schemas.ranking_item import RankingItemRecord


class OperationResponse(BaseModel):
    success: bool
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def from_error(cls, error: RankingError, **extra) -> "OperationResponse":
        return cls(success=False, error=str(error), error_type=error.error_type, **extra)


class SaveItemResponse(OperationResponse):
    # True whenever the item row itself was written, even if ranking follow-ups failed
    saved: bool = False
    item: Optional[RankingItemRecord] = None
    recalculated_category_ids: list[str] = []


class InitialDataResponse(OperationResponse):
    categories: Optional[list[CategoryRecord]] = None
    items: Optional[list[RankingItemRecord]] = None
    full_course: Optional[dict[str, Optional[str]]] = None


class RecalculationResponse(OperationResponse):
    category_id: str
    status: str
    image_url: Optional[str] = None
    ranks: dict[str, int] = {}
