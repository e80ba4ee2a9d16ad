"""Category lifecycle: create on demand, rename, delete with cascade."""

import logging
import uuid
from typing import Optional

from app.core.errors import RankingError, ValidationError
from app.repositories.gateway import CategoryDeletion, RankingGateway
from app.schemas.category import CategoryRecord
from app.services.results import OperationResult

logger = logging.getLogger(__name__)


def _clean_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationError("Category name is required")
    return name.strip()


def create_category(
    gateway: RankingGateway,
    name: Optional[str],
    category_id: Optional[str] = None,
) -> OperationResult[CategoryRecord]:
    """Create a category. Names are not required to be unique."""
    try:
        clean = _clean_name(name)
        created = gateway.insert_category(category_id or str(uuid.uuid4()), clean)
    except RankingError as e:
        logger.error(f"Could not create category {name!r}: {e}")
        return OperationResult.fail(e)
    logger.info(f"Created category id={created.id}, name={created.name}")
    return OperationResult.ok(created)


def rename_category(gateway: RankingGateway, category_id: str, name: Optional[str]) -> OperationResult[CategoryRecord]:
    try:
        renamed = gateway.rename_category(category_id, _clean_name(name))
    except RankingError as e:
        logger.error(f"Could not rename category {category_id}: {e}")
        return OperationResult.fail(e)
    return OperationResult.ok(renamed)


def delete_category(gateway: RankingGateway, category_id: str, owner_key: str) -> OperationResult[CategoryDeletion]:
    """
    Delete a category together with its items; full-course slots that pointed
    at those items are cleared to None in the same transaction.
    """
    try:
        deletion = gateway.delete_category(category_id, owner_key)
    except RankingError as e:
        logger.error(f"Could not delete category {category_id}: {e}")
        return OperationResult.fail(e)
    logger.info(
        f"Deleted category {category_id}: items={len(deletion.deleted_item_ids)}, "
        f"cleared_slots={deletion.cleared_slot_keys}"
    )
    return OperationResult.ok(deletion)
