"""SQLAlchemy implementation of the ranking gateway (Supabase Postgres in production)."""

import logging
from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional, Sequence

from fastapi import Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError, TransportError
from app.db.session import get_db
from app.models.category import Category
from app.models.full_course_selection import FullCourseSelection
from app.models.ranking_item import RankingItem
from app.repositories.gateway import (
    CategoryDeletion,
    ItemUpsert,
    RankingGateway,
    RankWriteBatch,
    RankWriteOutcome,
)
from app.schemas.category import CategoryRecord
from app.schemas.ranking_item import RankingItemRecord

logger = logging.getLogger(__name__)


def _error_code(exc: SQLAlchemyError) -> Optional[str]:
    """Backend error code (e.g. Postgres SQLSTATE) when the driver exposes one."""
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    return str(code) if code else None


class SqlRankingGateway(RankingGateway):
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _translate(self, action: str) -> Iterator[None]:
        """Roll back and re-raise store failures as ConflictError / TransportError."""
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Store rejected {action}: {e.orig}")
            raise ConflictError(f"{action} rejected: {e.orig}", code=_error_code(e)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Store failure during {action}: {e}")
            raise TransportError(f"{action} failed: {e}", code=_error_code(e)) from e

    # --- ranking items ---

    def list_items_by_category(self, category_id: str) -> list[RankingItemRecord]:
        with self._translate(f"list items of category {category_id}"):
            rows = (
                self.db.query(RankingItem)
                .filter(RankingItem.category_id == category_id)
                .order_by(RankingItem.score.desc())
                .all()
            )
            return [RankingItemRecord.model_validate(row) for row in rows]

    def write_item_ranks(self, category_id: str, ranks: Sequence[tuple[str, int]]) -> RankWriteBatch:
        batch = RankWriteBatch(category_id=category_id)
        for item_id, rank in ranks:
            outcome = RankWriteOutcome(item_id=item_id, rank=rank)
            try:
                with self._translate(f"rank update of item {item_id}"):
                    updated = (
                        self.db.query(RankingItem)
                        .filter(RankingItem.id == item_id, RankingItem.category_id == category_id)
                        .update({RankingItem.rank: rank}, synchronize_session=False)
                    )
                    self.db.commit()
                if updated == 0:
                    outcome.error = NotFoundError(f"Item {item_id} is no longer in category {category_id}")
            except (ConflictError, TransportError) as e:
                outcome.error = e
            batch.outcomes.append(outcome)
        return batch

    def upsert_item(self, item: RankingItemRecord) -> ItemUpsert:
        with self._translate(f"upsert of item {item.id}"):
            if not self.db.query(Category.id).filter(Category.id == item.category_id).first():
                raise ConflictError(f"Category {item.category_id} does not exist")

            row = self.db.query(RankingItem).filter(RankingItem.id == item.id).first()
            previous_category_id = row.category_id if row is not None else None
            if row is None:
                row = RankingItem(id=item.id)
                self.db.add(row)
            row.category_id = item.category_id
            row.name = item.name
            row.score = item.score
            row.eaten_at = item.eaten_at
            row.comment = item.comment
            row.image_url = item.image_url
            self.db.commit()
            self.db.refresh(row)
            return ItemUpsert(
                item=RankingItemRecord.model_validate(row),
                previous_category_id=previous_category_id,
            )

    def get_item(self, item_id: str) -> Optional[RankingItemRecord]:
        with self._translate(f"read of item {item_id}"):
            row = self.db.query(RankingItem).filter(RankingItem.id == item_id).first()
            return RankingItemRecord.model_validate(row) if row else None

    def list_items(
        self,
        *,
        eaten_on: Optional[date] = None,
        eaten_from: Optional[date] = None,
        eaten_until: Optional[date] = None,
    ) -> list[RankingItemRecord]:
        with self._translate("list items"):
            query = self.db.query(RankingItem)
            if eaten_on is not None:
                query = query.filter(RankingItem.eaten_at == eaten_on)
            if eaten_from is not None:
                query = query.filter(RankingItem.eaten_at >= eaten_from)
            if eaten_until is not None:
                query = query.filter(RankingItem.eaten_at <= eaten_until)
            rows = query.order_by(RankingItem.eaten_at, RankingItem.created_at).all()
            return [RankingItemRecord.model_validate(row) for row in rows]

    # --- categories ---

    def set_category_representative_image(self, category_id: str, image_url: Optional[str]) -> None:
        with self._translate(f"image update of category {category_id}"):
            updated = (
                self.db.query(Category)
                .filter(Category.id == category_id)
                .update({Category.image_url: image_url}, synchronize_session=False)
            )
            self.db.commit()
        if updated == 0:
            logger.warning(f"Representative image not written: category {category_id} does not exist")

    def get_category(self, category_id: str) -> Optional[CategoryRecord]:
        with self._translate(f"read of category {category_id}"):
            row = self.db.query(Category).filter(Category.id == category_id).first()
            return CategoryRecord.model_validate(row) if row else None

    def insert_category(self, category_id: str, name: str) -> CategoryRecord:
        with self._translate(f"insert of category {category_id}"):
            row = Category(id=category_id, name=name)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return CategoryRecord.model_validate(row)

    def rename_category(self, category_id: str, name: str) -> CategoryRecord:
        with self._translate(f"rename of category {category_id}"):
            row = self.db.query(Category).filter(Category.id == category_id).first()
            if row is None:
                raise NotFoundError(f"Category {category_id} not found")
            row.name = name
            self.db.commit()
            self.db.refresh(row)
            return CategoryRecord.model_validate(row)

    def delete_category(self, category_id: str, owner_key: str) -> CategoryDeletion:
        with self._translate(f"delete of category {category_id}"):
            row = self.db.query(Category).filter(Category.id == category_id).first()
            if row is None:
                raise NotFoundError(f"Category {category_id} not found")

            item_ids = [
                item_id
                for (item_id,) in self.db.query(RankingItem.id).filter(RankingItem.category_id == category_id)
            ]
            cleared: list[str] = []
            if item_ids:
                selections = (
                    self.db.query(FullCourseSelection)
                    .filter(FullCourseSelection.ranking_item_id.in_(item_ids))
                    .all()
                )
                for selection in selections:
                    selection.ranking_item_id = None
                    if selection.owner_key == owner_key:
                        cleared.append(selection.slot_key)
                self.db.flush()
            # Items go with the category through the relationship cascade
            self.db.delete(row)
            self.db.commit()
            return CategoryDeletion(
                category_id=category_id,
                deleted_item_ids=item_ids,
                cleared_slot_keys=sorted(cleared),
            )

    def list_categories(self) -> list[CategoryRecord]:
        with self._translate("list categories"):
            rows = self.db.query(Category).order_by(Category.created_at).all()
            return [CategoryRecord.model_validate(row) for row in rows]

    def list_all_categories_and_items(self) -> tuple[list[CategoryRecord], list[RankingItemRecord]]:
        with self._translate("bulk read of categories and items"):
            categories = self.db.query(Category).order_by(Category.created_at).all()
            items = (
                self.db.query(RankingItem)
                .order_by(RankingItem.category_id, RankingItem.rank, RankingItem.score.desc())
                .all()
            )
            return (
                [CategoryRecord.model_validate(c) for c in categories],
                [RankingItemRecord.model_validate(i) for i in items],
            )

    # --- full course ---

    def get_full_course_assignments(self, owner_key: str) -> dict[str, Optional[str]]:
        with self._translate(f"read of full course for {owner_key}"):
            rows = (
                self.db.query(FullCourseSelection)
                .filter(FullCourseSelection.owner_key == owner_key)
                .all()
            )
            return {row.slot_key: row.ranking_item_id for row in rows}

    def upsert_full_course_assignments(self, owner_key: str, assignments: dict[str, Optional[str]]) -> None:
        with self._translate(f"full course upsert for {owner_key}"):
            referenced = {item_id for item_id in assignments.values() if item_id is not None}
            if referenced:
                existing = {
                    item_id
                    for (item_id,) in self.db.query(RankingItem.id).filter(RankingItem.id.in_(referenced))
                }
                missing = referenced - existing
                if missing:
                    raise ConflictError(f"Ranking items not found: {sorted(missing)}")

            rows = {
                row.slot_key: row
                for row in self.db.query(FullCourseSelection)
                .filter(
                    FullCourseSelection.owner_key == owner_key,
                    FullCourseSelection.slot_key.in_(list(assignments)),
                )
                .all()
            }
            for slot_key, item_id in assignments.items():
                row = rows.get(slot_key)
                if row is None:
                    row = FullCourseSelection(owner_key=owner_key, slot_key=slot_key)
                    self.db.add(row)
                row.ranking_item_id = item_id
            self.db.commit()


def get_gateway(db: Session = Depends(get_db)) -> RankingGateway:
    """FastAPI dependency returning the SQL-backed gateway for the request's session."""
    return SqlRankingGateway(db)
