"""FastAPI dependencies."""

from fastapi import Request

from content_api.services.repository import ContentRepository


def get_repository(request: Request) -> ContentRepository:
    """Return the repository created by the application lifespan."""
    return request.app.state.repository
