from fastapi import APIRouter, Depends, HTTPException

from app.core.config import settings
from app.core.errors import http_status_for
from app.repositories.gateway import RankingGateway
from app.repositories.sql_gateway import get_gateway
from app.schemas.common import InitialDataResponse
from app.services.initial_data import get_initial_data

router = APIRouter(tags=["initial-data"])


@router.get("/initial-data", response_model=InitialDataResponse)
def read_initial_data(gateway: RankingGateway = Depends(get_gateway)):
    """
    Snapshot of all categories, items and the full course.
    Clients hydrate from this on load and re-fetch it after every write,
    since ranks and category images are recomputed server-side.
    """
    data = get_initial_data(gateway, settings.full_course_owner_key)
    if not data.success:
        raise HTTPException(
            status_code=http_status_for(data.error),
            detail=InitialDataResponse.from_error(data.error).model_dump(),
        )
    return InitialDataResponse(
        success=True,
        categories=data.categories,
        items=data.items,
        full_course=data.full_course,
    )
