"""
Save a single ranking item and keep the rankings of the affected categories in step.

An edit that moves the item to another category recalculates the category it
left first, then the one it is now in. Both recalculations always run. The
category it left is read from the stored row, so a client that omits it still
gets both categories re-ranked.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from app.core.errors import PartialRecalculationError, RankingError, ValidationError
from app.repositories.gateway import RankingGateway
from app.schemas.ranking_item import RankingItemRecord, RankingItemSave
from app.services.ranking import RecalculationResult, recalculate_category

logger = logging.getLogger(__name__)

SCORE_MIN = 0.0
SCORE_MAX = 5.0


@dataclass
class SaveResult:
    success: bool
    # True once the item row is durably written, independent of the ranking follow-ups
    saved: bool = False
    item: Optional[RankingItemRecord] = None
    error: Optional[RankingError] = None
    recalculations: list[RecalculationResult] = field(default_factory=list)


def _require_text(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def _coerce_score(value) -> float:
    """Accept numbers and numeric strings; reject everything else."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("score is required")
    if isinstance(value, bool):
        raise ValidationError("score must be a number")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValidationError(f"score must be a number, got {value!r}")
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"score must be a finite number, got {value!r}")
    score = float(value)
    if not SCORE_MIN <= score <= SCORE_MAX:
        raise ValidationError(f"score must be between {SCORE_MIN:.2f} and {SCORE_MAX:.2f}, got {score}")
    return score


def validate_item(payload: RankingItemSave) -> RankingItemRecord:
    """Normalize a save payload into a record, raising ValidationError for incomplete input."""
    if payload.eaten_at is None:
        raise ValidationError("eaten_at is required")
    return RankingItemRecord(
        id=_require_text(payload.id, "id"),
        category_id=_require_text(payload.category_id, "category_id"),
        name=_require_text(payload.name, "name"),
        score=_coerce_score(payload.score),
        eaten_at=payload.eaten_at,
        comment=(payload.comment or "").strip(),
        image_url=payload.image_url or None,
    )


def save_item(
    gateway: RankingGateway,
    payload: RankingItemSave,
    previous_category_id: Optional[str] = None,
) -> SaveResult:
    """
    Persist one item, then recalculate ranks and representative images.

    Args:
        gateway: Store to write through.
        payload: Item fields; `id` must already be assigned by the caller.
        previous_category_id: Category the item belonged to before this edit.
            Falls back to `payload.previous_category_id`. The category the
            store held the item under wins when the two disagree.

    Returns:
        SaveResult. `success` is False with `saved` False when validation or
        the upsert failed (nothing was recalculated), and False with `saved`
        True and a PartialRecalculationError when the item was stored but
        ranking metadata may be stale.
    """
    if previous_category_id is None:
        previous_category_id = payload.previous_category_id

    try:
        item = validate_item(payload)
    except ValidationError as e:
        logger.warning(f"Rejected item save: {e}")
        return SaveResult(success=False, error=e)

    logger.info(
        f"Saving item id={item.id}, name={item.name}, category_id={item.category_id}, "
        f"score={item.score}, eaten_at={item.eaten_at}, has_image={bool(item.image_url)}, "
        f"previous_category_id={previous_category_id}"
    )

    try:
        upserted = gateway.upsert_item(item)
    except RankingError as e:
        logger.error(f"Save of item {item.id} failed: {e}")
        return SaveResult(success=False, error=e)

    stored = upserted.item
    if upserted.previous_category_id and upserted.previous_category_id != previous_category_id:
        if previous_category_id:
            logger.warning(
                f"Item {item.id} was stored in {upserted.previous_category_id}, "
                f"not {previous_category_id} as the client sent"
            )
        previous_category_id = upserted.previous_category_id

    result = SaveResult(success=True, saved=True, item=stored)

    category_changed = bool(previous_category_id) and previous_category_id != item.category_id
    if category_changed:
        result.recalculations.append(recalculate_category(gateway, previous_category_id))
    result.recalculations.append(recalculate_category(gateway, item.category_id))

    failures = [error for recalculation in result.recalculations for error in recalculation.errors]
    if failures:
        stale = [r.category_id for r in result.recalculations if not r.ok]
        logger.warning(f"Item {item.id} saved but rankings may be stale for categories {stale}")
        result.success = False
        result.error = PartialRecalculationError(
            f"Item saved, but rankings may be briefly stale for categories: {', '.join(stale)}",
            failures=failures,
        )
        return result

    # Re-read so the caller gets the freshly assigned rank
    try:
        result.item = gateway.get_item(item.id) or stored
    except RankingError as e:
        logger.warning(f"Saved item {item.id} could not be re-read: {e}")
    logger.info(f"Saved item {item.id} with rank={result.item.rank}")
    return result
