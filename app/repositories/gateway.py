"""
Persistence boundary for categories, ranking items and full-course slots.

The ranking engine and the services depend only on `RankingGateway`; the
SQLAlchemy implementation lives in `app.repositories.sql_gateway`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from app.core.errors import RankingError
from app.schemas.category import CategoryRecord
from app.schemas.ranking_item import RankingItemRecord

BATCH_SUCCESS = "success"
BATCH_PARTIAL = "partial"
BATCH_FAILED = "failed"


@dataclass
class RankWriteOutcome:
    item_id: str
    rank: int
    error: Optional[RankingError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RankWriteBatch:
    """Per-item outcome of a best-effort rank fan-out."""

    category_id: str
    outcomes: list[RankWriteOutcome] = field(default_factory=list)

    @property
    def failures(self) -> list[RankWriteOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def status(self) -> str:
        failed = len(self.failures)
        if failed == 0:
            return BATCH_SUCCESS
        if failed == len(self.outcomes):
            return BATCH_FAILED
        return BATCH_PARTIAL


@dataclass
class ItemUpsert:
    item: RankingItemRecord
    # Category the row was in before this write; None for a fresh insert
    previous_category_id: Optional[str] = None


@dataclass
class CategoryDeletion:
    category_id: str
    deleted_item_ids: list[str] = field(default_factory=list)
    cleared_slot_keys: list[str] = field(default_factory=list)


class RankingGateway(ABC):
    """
    Base interface for the ranking store.

    Implementations raise TransportError / ConflictError / NotFoundError
    from `app.core.errors`; callers decide how to report them.
    """

    # --- ranking items ---

    @abstractmethod
    def list_items_by_category(self, category_id: str) -> list[RankingItemRecord]:
        """Items of a category ordered by score, highest first. Empty list when none."""
        raise NotImplementedError

    @abstractmethod
    def write_item_ranks(self, category_id: str, ranks: Sequence[tuple[str, int]]) -> RankWriteBatch:
        """
        Write each (item_id, rank) independently.
        A failure on one item does not stop the others; it is recorded in the batch.
        """
        raise NotImplementedError

    @abstractmethod
    def upsert_item(self, item: RankingItemRecord) -> ItemUpsert:
        """
        Insert or replace keyed by item.id. The stored rank is kept on update.
        The result carries the category the row was stored under before the write.
        """
        raise NotImplementedError

    @abstractmethod
    def get_item(self, item_id: str) -> Optional[RankingItemRecord]:
        raise NotImplementedError

    @abstractmethod
    def list_items(
        self,
        *,
        eaten_on: Optional[date] = None,
        eaten_from: Optional[date] = None,
        eaten_until: Optional[date] = None,
    ) -> list[RankingItemRecord]:
        """Items filtered by eaten_at (exact day or inclusive range), in insertion order."""
        raise NotImplementedError

    # --- categories ---

    @abstractmethod
    def set_category_representative_image(self, category_id: str, image_url: Optional[str]) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[CategoryRecord]:
        raise NotImplementedError

    @abstractmethod
    def insert_category(self, category_id: str, name: str) -> CategoryRecord:
        raise NotImplementedError

    @abstractmethod
    def rename_category(self, category_id: str, name: str) -> CategoryRecord:
        raise NotImplementedError

    @abstractmethod
    def delete_category(self, category_id: str, owner_key: str) -> CategoryDeletion:
        """
        Delete a category and its items in one transaction, clearing every
        full-course slot of `owner_key` that pointed at one of those items.
        """
        raise NotImplementedError

    @abstractmethod
    def list_categories(self) -> list[CategoryRecord]:
        """All categories, oldest first."""
        raise NotImplementedError

    @abstractmethod
    def list_all_categories_and_items(self) -> tuple[list[CategoryRecord], list[RankingItemRecord]]:
        """Bulk read for hydration. Fails as a whole if either half fails."""
        raise NotImplementedError

    # --- full course ---

    @abstractmethod
    def get_full_course_assignments(self, owner_key: str) -> dict[str, Optional[str]]:
        """Stored slot rows only; slots never written are absent."""
        raise NotImplementedError

    @abstractmethod
    def upsert_full_course_assignments(self, owner_key: str, assignments: dict[str, Optional[str]]) -> None:
        """Upsert every (slot_key -> item id) pair in a single transaction."""
        raise NotImplementedError
