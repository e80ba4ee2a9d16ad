"""
Full-course menu: a fixed set of named slots, each holding at most one ranking item.

Slots only store item references; nothing here reads or writes scores or ranks.
"""

import logging
from typing import Optional

from app.core.errors import InvalidSlotError, RankingError
from app.repositories.gateway import RankingGateway
from app.services.results import OperationResult

logger = logging.getLogger(__name__)

# Order is the order the courses are served in
FULL_COURSE_SLOTS: list[dict[str, str]] = [
    {"key": "appetizer", "label": "前菜", "emoji": "🥗"},
    {"key": "soup", "label": "スープ", "emoji": "🍲"},
    {"key": "fish", "label": "魚料理", "emoji": "🐟"},
    {"key": "meat", "label": "肉料理", "emoji": "🥩"},
    {"key": "main", "label": "メインディッシュ", "emoji": "👨‍🍳"},
    {"key": "salad", "label": "サラダ", "emoji": "🥬"},
    {"key": "dessert", "label": "デザート", "emoji": "🍰"},
    {"key": "drink", "label": "ドリンク", "emoji": "🍷"},
]

SLOT_KEYS: tuple[str, ...] = tuple(slot["key"] for slot in FULL_COURSE_SLOTS)


def empty_assignments() -> dict[str, Optional[str]]:
    return {key: None for key in SLOT_KEYS}


def _check_slot_key(slot_key: str) -> None:
    if slot_key not in SLOT_KEYS:
        raise InvalidSlotError(slot_key)


class FullCourseStore:
    """Slot assignments of one owner, read and written through the gateway."""

    def __init__(self, gateway: RankingGateway, owner_key: str):
        self.gateway = gateway
        self.owner_key = owner_key

    def get_assignments(self) -> OperationResult[dict[str, Optional[str]]]:
        """Every slot key, None for slots never assigned. Rows for unknown keys are ignored."""
        try:
            stored = self.gateway.get_full_course_assignments(self.owner_key)
        except RankingError as e:
            logger.error(f"Could not read full course for owner {self.owner_key}: {e}")
            return OperationResult.fail(e)
        assignments = empty_assignments()
        for slot_key, item_id in stored.items():
            if slot_key in assignments:
                assignments[slot_key] = item_id
        return OperationResult.ok(assignments)

    def set_slot(self, slot_key: str, item_id: Optional[str]) -> OperationResult[None]:
        return self.set_all_slots({slot_key: item_id})

    def set_all_slots(self, assignments: dict[str, Optional[str]]) -> OperationResult[None]:
        """
        Upsert the given slots in one batch. Keys are all checked first, so an
        unknown key means nothing is written. Slots not in the mapping are left as they are.
        """
        try:
            for slot_key in assignments:
                _check_slot_key(slot_key)
        except InvalidSlotError as e:
            logger.warning(f"Rejected full course update: {e}")
            return OperationResult.fail(e)

        normalized = {key: (item_id or None) for key, item_id in assignments.items()}
        try:
            self.gateway.upsert_full_course_assignments(self.owner_key, normalized)
        except RankingError as e:
            logger.error(f"Could not save full course for owner {self.owner_key}: {e}")
            return OperationResult.fail(e)
        logger.info(f"Saved full course slots {sorted(normalized)} for owner {self.owner_key}")
        return OperationResult.ok()
