from app.models.category import Category
from app.models.ranking_item import RankingItem
from app.models.full_course_selection import FullCourseSelection

__all__ = [
    "Category",
    "RankingItem",
    "FullCourseSelection",
]
