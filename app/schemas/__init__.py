from app.schemas.category import CategoryCreate, CategoryRecord, CategoryUpdate
from app.schemas.ranking_item import CalendarDay, RankingItemRecord, RankingItemSave
from app.schemas.full_course import FullCourseSlotRead, FullCourseSlotUpdate
from app.schemas.common import (
    InitialDataResponse,
    OperationResponse,
    RecalculationResponse,
    SaveItemResponse,
)

__all__ = [
    "CategoryCreate",
    "CategoryRecord",
    "CategoryUpdate",
    "CalendarDay",
    "RankingItemRecord",
    "RankingItemSave",
    "FullCourseSlotRead",
    "FullCourseSlotUpdate",
    "InitialDataResponse",
    "OperationResponse",
    "RecalculationResponse",
    "SaveItemResponse",
]
