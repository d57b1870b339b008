"""
Catalog endpoints for API v1.

Listing, categories and single‑service lookups are public and only
ever return active services.  Creating, updating and deleting require
the ``admin`` role.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from geed_api.app.core.errors import RecordNotFound, not_found
from geed_api.app.core.security import require_roles
from geed_api.app.schemas.common import MessageResponse
from geed_api.app.schemas.service import (
    CATEGORIES,
    CategoryListResponse,
    ServiceCreate,
    ServiceListResponse,
    ServiceResponse,
    ServiceUpdate,
)
from geed_api.app.services.catalog_service import CatalogService

from ..deps import get_catalog_service

router = APIRouter()


@router.get("", response_model=ServiceListResponse)
async def list_services(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: Optional[str] = Query(None, max_length=50),
    search: Optional[str] = Query(None, max_length=100),
    catalog: CatalogService = Depends(get_catalog_service),
) -> ServiceListResponse:
    """Return a page of active services.

    Ordered by ``order`` ascending, then newest first.  ``search``
    matches title, description and short description case
    insensitively.
    ``category`` is an exact match, so an unknown value gives an empty
    page.
    """
    search = search.strip() if search else None
    result = await catalog.list_services(page, limit, category=category, search=search or None)
    return ServiceListResponse(
        count=len(result.items),
        total=result.total,
        page=result.page,
        pages=result.pages,
        services=result.items,
    )


@router.get("/categories/list", response_model=CategoryListResponse)
async def list_categories() -> CategoryListResponse:
    return CategoryListResponse(categories=CATEGORIES)


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
) -> ServiceResponse:
    """Retrieve one active service; inactive or unknown ids give 404."""
    try:
        service = await catalog.get_public_service(service_id)
    except RecordNotFound:
        raise not_found("Service")
    return ServiceResponse(service=service)


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_service(
    payload: ServiceCreate,
    current_user: dict = Depends(require_roles("admin")),
    catalog: CatalogService = Depends(get_catalog_service),
) -> ServiceResponse:
    """Create a service owned by the calling administrator."""
    service = await catalog.create_service(payload, current_user)
    return ServiceResponse(message="Service created successfully", service=service)


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: str,
    payload: ServiceUpdate,
    current_user: dict = Depends(require_roles("admin")),
    catalog: CatalogService = Depends(get_catalog_service),
) -> ServiceResponse:
    try:
        service = await catalog.update_service(service_id, payload)
    except RecordNotFound:
        raise not_found("Service")
    return ServiceResponse(message="Service updated successfully", service=service)


@router.delete("/{service_id}", response_model=MessageResponse)
async def delete_service(
    service_id: str,
    current_user: dict = Depends(require_roles("admin")),
    catalog: CatalogService = Depends(get_catalog_service),
) -> MessageResponse:
    try:
        await catalog.delete_service(service_id)
    except RecordNotFound:
        raise not_found("Service")
    return MessageResponse(message="Service deleted successfully")
