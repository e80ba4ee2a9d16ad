from fastapi import APIRouter, Depends, HTTPException, Response

from app.core.config import settings
from app.core.errors import http_status_for
from app.repositories.gateway import RankingGateway
from app.repositories.sql_gateway import get_gateway
from app.schemas.category import CategoryCreate, CategoryRecord, CategoryUpdate
from app.schemas.common import OperationResponse, RecalculationResponse
from app.schemas.ranking_item import RankingItemRecord
from app.services import categories as category_service
from app.services.ranking import recalculate_category

router = APIRouter(prefix="/categories", tags=["categories"])


def _get_category_or_404(gateway: RankingGateway, category_id: str) -> CategoryRecord:
    category = gateway.get_category(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.get("", response_model=list[CategoryRecord])
def list_categories(gateway: RankingGateway = Depends(get_gateway)):
    """List categories with their representative image."""
    return gateway.list_categories()


@router.post("", response_model=CategoryRecord, status_code=201)
def create_category(body: CategoryCreate, gateway: RankingGateway = Depends(get_gateway)):
    """Create a category; the id is generated unless the client supplies one."""
    result = category_service.create_category(gateway, body.name, category_id=body.id)
    if not result.success:
        raise HTTPException(
            status_code=http_status_for(result.error),
            detail=OperationResponse.from_error(result.error).model_dump(),
        )
    return result.value


@router.patch("/{category_id}", response_model=CategoryRecord)
def rename_category(category_id: str, body: CategoryUpdate, gateway: RankingGateway = Depends(get_gateway)):
    """Rename a category."""
    result = category_service.rename_category(gateway, category_id, body.name)
    if not result.success:
        raise HTTPException(
            status_code=http_status_for(result.error),
            detail=OperationResponse.from_error(result.error).model_dump(),
        )
    return result.value


@router.delete("/{category_id}", status_code=204)
def delete_category(category_id: str, gateway: RankingGateway = Depends(get_gateway)):
    """
    Delete a category and every item in it.
    Full-course slots that held one of those items are cleared.
    """
    result = category_service.delete_category(gateway, category_id, settings.full_course_owner_key)
    if not result.success:
        raise HTTPException(
            status_code=http_status_for(result.error),
            detail=OperationResponse.from_error(result.error).model_dump(),
        )
    return Response(status_code=204)


@router.get("/{category_id}/ranking", response_model=list[RankingItemRecord])
def get_category_ranking(category_id: str, gateway: RankingGateway = Depends(get_gateway)):
    """Items of a category, best first."""
    _get_category_or_404(gateway, category_id)
    return gateway.list_items_by_category(category_id)


@router.post("/{category_id}/recalculate", response_model=RecalculationResponse)
def recalculate(category_id: str, gateway: RankingGateway = Depends(get_gateway)):
    """Re-derive ranks and the representative image from the stored scores."""
    _get_category_or_404(gateway, category_id)
    result = recalculate_category(gateway, category_id)
    return RecalculationResponse(
        success=result.ok,
        error="; ".join(str(e) for e in result.errors) or None,
        error_type=result.errors[0].error_type if result.errors else None,
        category_id=category_id,
        status=result.status,
        image_url=result.image_url,
        ranks=dict(result.ranks),
    )
