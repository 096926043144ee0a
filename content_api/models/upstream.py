"""Raw payload shapes returned by the upstream content API.

These models only validate structure.  Every field that the API has been
seen to omit or send as ``null`` is optional here, and loosely typed
fields (dates, sort order, flags, meta) are kept as ``Any`` so the
normalizers can apply their own defaulting instead of rejecting the
payload.
"""

from typing import Any

from pydantic import BaseModel, TypeAdapter, field_validator

Meta = list[Any] | dict[str, Any] | None


class _UpstreamModel(BaseModel):
    model_config = {"extra": "ignore"}


class ApiPost(_UpstreamModel):
    id: int | str
    title: str | None = None
    slug: str | None = None
    excerpt: str | None = None
    body: str | None = None
    published_at: Any = None
    cover_image_url: str | None = None


class ApiPortfolioProject(_UpstreamModel):
    id: int | str
    title: str | None = None
    slug: str | None = None
    tagline: str | None = None
    summary: str | None = None
    body: str | None = None
    thumbnail_url: str | None = None
    hero_image_url: str | None = None
    project_url: str | None = None
    source_url: str | None = None
    tags: Meta = None
    is_featured: Any = None
    sort_order: Any = None
    published_at: Any = None


class ApiService(_UpstreamModel):
    slug: str
    title: str | None = None
    subtitle: str | None = None
    excerpt: str | None = None
    body: str | None = None
    cover_image_url: str | None = None
    is_featured: Any = None
    sort_order: Any = None

    @field_validator("slug")
    @classmethod
    def _slug_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("slug must not be blank")
        return value


class ApiAboutContent(_UpstreamModel):
    id: int | str | None = None
    title: str | None = None
    summary: str | None = None
    excerpt: str | None = None
    body: str | None = None
    content: str | None = None
    hero_image_url: str | None = None
    cta_label: str | None = None
    cta_url: str | None = None
    skills: Meta = None


class ApiHomepageService(_UpstreamModel):
    slug: str | None = None
    title: str | None = None
    subtitle: str | None = None
    excerpt: str | None = None
    body: str | None = None
    cover_image_url: str | None = None
    is_featured: Any = None
    sort_order: Any = None
    meta: Meta = None


class ApiHomepagePortfolio(_UpstreamModel):
    id: int | str | None = None
    title: str | None = None
    slug: str | None = None
    tagline: str | None = None
    summary: str | None = None
    body: str | None = None
    thumbnail_url: str | None = None
    hero_image_url: str | None = None
    project_url: str | None = None
    source_url: str | None = None
    tags: Meta = None
    is_featured: Any = None
    sort_order: Any = None
    published_at: Any = None


class ApiHomepagePost(_UpstreamModel):
    id: int | str | None = None
    title: str | None = None
    slug: str | None = None
    excerpt: str | None = None
    body: str | None = None
    cover_image_url: str | None = None
    published_at: Any = None
    status: str | None = None


class ApiHomepageContent(_UpstreamModel):
    services: list[ApiHomepageService | None] | None = None
    portfolios: list[ApiHomepagePortfolio | None] | None = None
    posts: list[ApiHomepagePost | None] | None = None
    blogs: list[ApiHomepagePost | None] | None = None


# Top-level payload adapters (list endpoints and nullable singletons)
POSTS_PAYLOAD = TypeAdapter(list[ApiPost])
PORTFOLIO_PAYLOAD = TypeAdapter(list[ApiPortfolioProject])
SERVICES_PAYLOAD = TypeAdapter(list[ApiService])
ABOUT_PAYLOAD = TypeAdapter(ApiAboutContent | None)
HOMEPAGE_PAYLOAD = TypeAdapter(ApiHomepageContent | None)
