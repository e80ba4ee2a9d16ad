from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.core.config import settings
from app.core.errors import http_status_for
from app.repositories.gateway import RankingGateway
from app.repositories.sql_gateway import get_gateway
from app.schemas.common import OperationResponse
from app.schemas.full_course import FullCourseSlotRead, FullCourseSlotUpdate
from app.services.full_course import FULL_COURSE_SLOTS, FullCourseStore

router = APIRouter(prefix="/full-course", tags=["full-course"])


def _store(gateway: RankingGateway) -> FullCourseStore:
    return FullCourseStore(gateway, settings.full_course_owner_key)


def _raise_for(result) -> None:
    if not result.success:
        raise HTTPException(
            status_code=http_status_for(result.error),
            detail=OperationResponse.from_error(result.error).model_dump(),
        )


@router.get("/slots", response_model=list[FullCourseSlotRead])
def list_slots():
    """Slot definitions in serving order."""
    return FULL_COURSE_SLOTS


@router.get("", response_model=dict[str, Optional[str]])
def get_full_course(gateway: RankingGateway = Depends(get_gateway)):
    """Every slot key mapped to its item id, null when unassigned."""
    result = _store(gateway).get_assignments()
    _raise_for(result)
    return result.value


@router.put("", response_model=OperationResponse)
def save_full_course(body: dict[str, Optional[str]], gateway: RankingGateway = Depends(get_gateway)):
    """Save several slots at once (one transaction). Slots not in the body are untouched."""
    result = _store(gateway).set_all_slots(body)
    _raise_for(result)
    return OperationResponse(success=True)


@router.put("/{slot_key}", response_model=OperationResponse)
def save_full_course_slot(slot_key: str, body: FullCourseSlotUpdate, gateway: RankingGateway = Depends(get_gateway)):
    """Assign an item to one slot, or clear it with `ranking_item_id: null`."""
    result = _store(gateway).set_slot(slot_key, body.ranking_item_id)
    _raise_for(result)
    return OperationResponse(success=True)
