"""Listing order for each content type.

All orderers return a new list and leave the input untouched.  Python's
sort is stable, so items that compare equal keep their upstream order.
"""

import unicodedata
from collections.abc import Iterable

from content_api.models.content import PortfolioProject, Post, Service


def _collation_key(text: str) -> tuple[str, str]:
    """Locale-style key: accents and case ignored first, raw text breaks ties."""
    decomposed = unicodedata.normalize("NFKD", text)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (folded.casefold(), text)


def sort_posts_by_published_date(posts: Iterable[Post]) -> list[Post]:
    """Newest first."""
    return sorted(posts, key=lambda p: p.published_at, reverse=True)


def sort_projects_for_listing(
    projects: Iterable[PortfolioProject],
) -> list[PortfolioProject]:
    """Featured first, then ascending sort order, then newest first."""
    return sorted(
        projects,
        key=lambda p: (
            not p.is_featured,
            p.sort_order,
            -p.published_at.timestamp(),
        ),
    )


def sort_services(services: Iterable[Service]) -> list[Service]:
    """Featured first, then ascending sort order, then title."""
    return sorted(
        services,
        key=lambda s: (not s.is_featured, s.sort_order, _collation_key(s.title)),
    )
