"""
Rank recalculation for a single category.

Restores two invariants from the persisted state alone, so it is safe to run
repeatedly and from any code path (create, update, category move):

- ranks within the category are 1..n in descending score order;
- the category's image_url is the image of the rank-1 item, or None when
  the category is empty.

Items with equal scores keep the order the store returned them in.

The read and the writes are separate store calls, not one transaction; a
concurrent writer on the same category between them can leave a stale
result until the next recalculation.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from app.core.errors import RankingError
from app.repositories.gateway import (
    BATCH_FAILED,
    BATCH_PARTIAL,
    BATCH_SUCCESS,
    RankingGateway,
    RankWriteBatch,
)
from app.schemas.ranking_item import RankingItemRecord

logger = logging.getLogger(__name__)


@dataclass
class RecalculationResult:
    category_id: str
    status: str = BATCH_SUCCESS
    ranks: list[tuple[str, int]] = field(default_factory=list)
    image_url: Optional[str] = None
    rank_batch: Optional[RankWriteBatch] = None
    errors: list[RankingError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == BATCH_SUCCESS


def assign_ranks(items: list[RankingItemRecord]) -> list[tuple[str, int]]:
    """1-based ranks in the given order (already sorted by score, highest first)."""
    return [(item.id, index + 1) for index, item in enumerate(items)]


def recalculate_category(gateway: RankingGateway, category_id: str) -> RecalculationResult:
    """
    Reload a category's items, rewrite their ranks and its representative image.

    Never raises for store failures; they are reported on the result:
    - status "failed": the items could not be loaded, nothing was written;
    - status "partial": some rank writes or the image write failed;
    - status "success": everything was written.
    """
    result = RecalculationResult(category_id=category_id)

    try:
        items = gateway.list_items_by_category(category_id)
    except RankingError as e:
        logger.error(f"Recalculation of category {category_id} aborted, items not loaded: {e}")
        result.status = BATCH_FAILED
        result.errors.append(e)
        return result

    if not items:
        try:
            gateway.set_category_representative_image(category_id, None)
        except RankingError as e:
            logger.error(f"Could not clear image of empty category {category_id}: {e}")
            result.status = BATCH_FAILED
            result.errors.append(e)
        return result

    result.ranks = assign_ranks(items)
    batch = gateway.write_item_ranks(category_id, result.ranks)
    result.rank_batch = batch
    for failure in batch.failures:
        logger.warning(f"Rank {failure.rank} not written for item {failure.item_id}: {failure.error}")
        result.errors.append(failure.error)

    # Written from the order loaded above, even if some rank writes failed
    result.image_url = items[0].image_url
    try:
        gateway.set_category_representative_image(category_id, result.image_url)
    except RankingError as e:
        logger.error(f"Could not set image of category {category_id}: {e}")
        result.errors.append(e)

    if result.errors:
        result.status = BATCH_PARTIAL
    logger.info(
        f"Recalculated category {category_id}: items={len(items)}, "
        f"rank_writes={batch.status}, status={result.status}"
    )
    return result
