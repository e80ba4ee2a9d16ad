import logging
import re
import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.core.errors import http_status_for
from app.repositories.gateway import RankingGateway
from app.repositories.sql_gateway import get_gateway
from app.schemas.common import SaveItemResponse
from app.schemas.ranking_item import CalendarDay, RankingItemRecord, RankingItemSave
from app.services.calendar_view import items_for_date, month_overview
from app.services.ranking_items import save_item

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/items", tags=["ranking-items"])

MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


@router.put("", response_model=SaveItemResponse)
def save_ranking_item(body: RankingItemSave, gateway: RankingGateway = Depends(get_gateway)):
    """
    Create or update a ranking item, then recalculate the rankings it affects.

    Send `previous_category_id` when an edit moves the item to another category
    so that both categories are re-ranked. When `id` is omitted a new one is generated.

    A body with `success=false` and `saved=true` means the item was stored but
    rankings may be briefly stale; re-fetch /initial-data to refresh.
    """
    if not body.id:
        body.id = str(uuid.uuid4())

    result = save_item(gateway, body)
    if not result.saved:
        raise HTTPException(
            status_code=http_status_for(result.error),
            detail=SaveItemResponse.from_error(result.error, saved=False).model_dump(mode="json"),
        )
    if not result.success:
        return SaveItemResponse.from_error(
            result.error,
            saved=True,
            item=result.item,
            recalculated_category_ids=[r.category_id for r in result.recalculations],
        )
    return SaveItemResponse(
        success=True,
        saved=True,
        item=result.item,
        recalculated_category_ids=[r.category_id for r in result.recalculations],
    )


@router.get("", response_model=list[RankingItemRecord])
def list_ranking_items(
    date_: Optional[date] = Query(None, alias="date", description="Only items eaten on this day (YYYY-MM-DD)"),
    gateway: RankingGateway = Depends(get_gateway),
):
    """List items, optionally only those of one calendar day."""
    if date_ is not None:
        return items_for_date(gateway, date_)
    return gateway.list_items()


@router.get("/calendar", response_model=list[CalendarDay])
def get_month_calendar(
    month: str = Query(..., description="Month as YYYY-MM"),
    gateway: RankingGateway = Depends(get_gateway),
):
    """Days of a month that have entries, each with its cover item."""
    match = MONTH_PATTERN.match(month)
    if not match or not 1 <= int(match.group(2)) <= 12:
        raise HTTPException(status_code=422, detail="month must be YYYY-MM")
    return month_overview(gateway, int(match.group(1)), int(match.group(2)))


@router.get("/{item_id}", response_model=RankingItemRecord)
def get_ranking_item(item_id: str, gateway: RankingGateway = Depends(get_gateway)):
    """Get a ranking item by ID."""
    item = gateway.get_item(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item
