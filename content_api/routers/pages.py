"""Page content endpoints: about and homepage."""

from fastapi import APIRouter, Depends, HTTPException, Query

from content_api.dependencies import get_repository
from content_api.models.content import AboutContent, HomepageContent
from content_api.services.repository import DEFAULT_ABOUT_SLUG, ContentRepository

router = APIRouter(tags=["pages"])


@router.get("/about", response_model=AboutContent)
async def get_about(
    slug: str = Query(
        default=DEFAULT_ABOUT_SLUG,
        pattern=r"^[a-zA-Z0-9][a-zA-Z0-9._-]*$",
        max_length=100,
    ),
    repo: ContentRepository = Depends(get_repository),
):
    """Get about content for a slug (``default`` unless given)."""
    try:
        return await repo.get_about(slug)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/homepage", response_model=HomepageContent)
async def get_homepage(repo: ContentRepository = Depends(get_repository)):
    """Get the homepage sections."""
    return await repo.get_homepage()
