"""Service offering endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Path

from content_api.dependencies import get_repository
from content_api.models.content import Service
from content_api.services.ordering import sort_services
from content_api.services.repository import ContentRepository

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=list[Service])
async def list_services(repo: ContentRepository = Depends(get_repository)):
    """Get services in listing order."""
    return sort_services(await repo.get_services())


@router.get("/{slug}", response_model=Service)
async def get_service(
    slug: str = Path(..., max_length=200),
    repo: ContentRepository = Depends(get_repository),
):
    service = await repo.get_service(slug)
    if service is None:
        raise HTTPException(status_code=404, detail="Service not found")
    return service
