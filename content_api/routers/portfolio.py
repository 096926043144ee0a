"""Portfolio project endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from content_api.dependencies import get_repository
from content_api.models.content import PortfolioProject
from content_api.services.ordering import sort_projects_for_listing
from content_api.services.repository import ContentRepository

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=list[PortfolioProject])
async def list_projects(
    featured: bool | None = Query(
        default=None, description="Only featured (true) or non-featured (false)"
    ),
    repo: ContentRepository = Depends(get_repository),
):
    """Get portfolio projects in listing order."""
    projects = sort_projects_for_listing(await repo.get_portfolio_projects())
    if featured is not None:
        projects = [p for p in projects if p.is_featured == featured]
    return projects


@router.get("/{slug_or_id}", response_model=PortfolioProject)
async def get_project(
    slug_or_id: str = Path(..., max_length=200),
    repo: ContentRepository = Depends(get_repository),
):
    """Get a single project by slug or id."""
    project = await repo.get_portfolio_project(slug_or_id)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return project
