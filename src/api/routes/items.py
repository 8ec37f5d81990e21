"""Item catalog routes.

Endpoints:
- GET /api/items: List items (skip/limit pagination)
- GET /api/items/{id}: Get one item
- POST /api/items: Create an item (auth)
- PUT /api/items/{id}: Replace an item (auth)
- DELETE /api/items/{id}: Delete an item (auth)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from api.dependencies import get_item_repo
from api.models import ItemEnvelope, ItemListEnvelope, ItemRequest, ItemResponse, StatusResponse
from api.security import get_current_identity
from domain.model.errors import NotFoundError, ValidationError
from domain.model.identity import Identity
from port.item_repository import ItemRepository
from services import item_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/items", tags=["items"])


def _to_http(e: Exception) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("", response_model=ItemListEnvelope)
async def list_items(
    skip: int = Query(0),
    limit: int = Query(item_service.DEFAULT_LIMIT),
    repo: ItemRepository = Depends(get_item_repo),
):
    """List items. Out-of-range skip/limit are clamped rather than rejected."""
    items = item_service.list_items(repo, skip=skip, limit=limit)
    return ItemListEnvelope(status=200, data=[ItemResponse.from_domain(i) for i in items])


@router.get("/{item_id}", response_model=ItemEnvelope)
async def get_item(item_id: str, repo: ItemRepository = Depends(get_item_repo)):
    try:
        item = item_service.get_item(repo, item_id)
    except (ValidationError, NotFoundError) as e:
        raise _to_http(e)
    return ItemEnvelope(status=200, data=ItemResponse.from_domain(item))


@router.post("", response_model=ItemEnvelope, status_code=status.HTTP_201_CREATED)
async def create_item(
    request: ItemRequest,
    response: Response,
    identity: Identity = Depends(get_current_identity),
    repo: ItemRepository = Depends(get_item_repo),
):
    """Create an item and point Location at it."""
    try:
        item = item_service.create_item(repo, request.to_fields())
    except ValidationError as e:
        raise _to_http(e)

    response.headers["Location"] = f"/api/items/{item.id}"
    logger.info("Item added", extra={"itemId": item.id, "userId": identity.subject_id})
    return ItemEnvelope(status=201, data=ItemResponse.from_domain(item))


@router.put("/{item_id}", response_model=ItemEnvelope)
async def replace_item(
    item_id: str,
    request: ItemRequest,
    identity: Identity = Depends(get_current_identity),
    repo: ItemRepository = Depends(get_item_repo),
):
    """Replace all mutable fields of an item."""
    try:
        item = item_service.replace_item(repo, item_id, request.to_fields())
    except (ValidationError, NotFoundError) as e:
        raise _to_http(e)
    return ItemEnvelope(status=200, data=ItemResponse.from_domain(item))


@router.delete("/{item_id}", response_model=StatusResponse)
async def delete_item(
    item_id: str,
    identity: Identity = Depends(get_current_identity),
    repo: ItemRepository = Depends(get_item_repo),
):
    try:
        item_service.delete_item(repo, item_id)
    except (ValidationError, NotFoundError) as e:
        raise _to_http(e)
    return StatusResponse(status=200, message="Deleted")
