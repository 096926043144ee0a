"""Blog post endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from content_api.dependencies import get_repository
from content_api.models.content import Post
from content_api.services.ordering import sort_posts_by_published_date
from content_api.services.repository import ContentRepository

router = APIRouter(prefix="/posts", tags=["blog"])


@router.get("", response_model=list[Post])
async def list_posts(
    limit: int = Query(default=0, ge=0, le=500, description="0 = no limit"),
    repo: ContentRepository = Depends(get_repository),
):
    """Get all posts, newest first."""
    posts = sort_posts_by_published_date(await repo.get_posts())
    return posts[:limit] if limit else posts


@router.get("/{slug_or_id}", response_model=Post)
async def get_post(
    slug_or_id: str = Path(..., max_length=200),
    repo: ContentRepository = Depends(get_repository),
):
    """Get a single post by slug or id."""
    post = await repo.get_post(slug_or_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post
