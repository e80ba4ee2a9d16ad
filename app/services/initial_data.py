"""Bulk snapshot used by clients to hydrate (and re-hydrate after each write)."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from app.core.errors import RankingError
from app.repositories.gateway import RankingGateway
from app.schemas.category import CategoryRecord
from app.schemas.ranking_item import RankingItemRecord
from app.services.full_course import FullCourseStore

logger = logging.getLogger(__name__)


@dataclass
class InitialData:
    success: bool
    categories: list[CategoryRecord] = field(default_factory=list)
    items: list[RankingItemRecord] = field(default_factory=list)
    full_course: dict[str, Optional[str]] = field(default_factory=dict)
    error: Optional[RankingError] = None


def get_initial_data(gateway: RankingGateway, owner_key: str) -> InitialData:
    """All categories, all items and the owner's full course, or a failure as a whole."""
    try:
        categories, items = gateway.list_all_categories_and_items()
    except RankingError as e:
        logger.error(f"Initial data not loaded: {e}")
        return InitialData(success=False, error=e)

    full_course = FullCourseStore(gateway, owner_key).get_assignments()
    if not full_course.success:
        return InitialData(success=False, error=full_course.error)

    return InitialData(success=True, categories=categories, items=items, full_course=full_course.value)
