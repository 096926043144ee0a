"""Canonical view models consumed by rendering and feed code.

All models are frozen: the cache hands out deep copies, and nothing is
expected to mutate an entity after normalization.
"""

import sys
from datetime import datetime

from pydantic import BaseModel

# Sort order for items that do not specify one; sorts after any real value
SORT_ORDER_LAST = sys.maxsize


class _ViewModel(BaseModel):
    model_config = {"frozen": True}


class Post(_ViewModel):
    """Blog post."""

    id: int | str
    title: str
    slug: str
    excerpt: str = ""
    body: str = ""
    published_at: datetime
    cover_image_url: str | None = None


class PortfolioProject(_ViewModel):
    """Portfolio project for listing and detail pages."""

    id: int | str
    title: str
    slug: str
    tagline: str = ""
    summary: str = ""
    body: str = ""
    thumbnail_url: str | None = None
    hero_image_url: str | None = None
    project_url: str | None = None
    source_url: str | None = None
    tags: list[str] = []
    is_featured: bool = False
    sort_order: int = SORT_ORDER_LAST
    published_at: datetime


class Service(_ViewModel):
    """Service offering."""

    slug: str
    title: str
    subtitle: str | None = None
    excerpt: str | None = None
    body: str = ""
    cover_image_url: str | None = None
    is_featured: bool = False
    sort_order: int = SORT_ORDER_LAST


class AboutContent(_ViewModel):
    """About page content."""

    title: str
    summary: str = ""
    body: str = ""
    hero_image_url: str | None = None
    cta_label: str | None = None
    cta_url: str | None = None
    skills: list[str] = []


DEFAULT_ABOUT_CONTENT = AboutContent(
    title="About Me",
    summary="Story coming soon.",
    body="<p>Content is on the way.</p>",
)


class HomepageCard(_ViewModel):
    """Summary card shown in a homepage section."""

    id: str
    title: str
    description: str
    cover_image_url: str | None = None
    href: str
    tags: list[str] | None = None
    is_featured: bool | None = None


class HomepageContent(_ViewModel):
    """Homepage sections, in upstream order."""

    portfolios: list[HomepageCard] = []
    services: list[HomepageCard] = []
    blogs: list[HomepageCard] = []
