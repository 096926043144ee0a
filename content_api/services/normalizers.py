"""Normalization of upstream payloads into canonical view models.

Each payload goes through two steps:

1. ``validate_*`` checks the raw JSON against the upstream schema
   (``content_api.models.upstream``) and raises ``ContentValidationError``
   if the structure is unusable.
2. ``normalize_*`` applies the defaulting rules to the validated objects.
   These functions are pure apart from the "now" fallback for dates and
   the random token fallback for card ids.

``load_*`` combines both steps and is what the repository hands to the cache.
"""

import logging
import math
import re
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter, ValidationError

from content_api.errors import ContentValidationError
from content_api.models.content import (
    DEFAULT_ABOUT_CONTENT,
    SORT_ORDER_LAST,
    AboutContent,
    HomepageCard,
    HomepageContent,
    PortfolioProject,
    Post,
    Service,
)
from content_api.models.upstream import (
    ABOUT_PAYLOAD,
    HOMEPAGE_PAYLOAD,
    PORTFOLIO_PAYLOAD,
    POSTS_PAYLOAD,
    SERVICES_PAYLOAD,
    ApiAboutContent,
    ApiHomepageContent,
    ApiHomepagePortfolio,
    ApiHomepagePost,
    ApiHomepageService,
    ApiPortfolioProject,
    ApiPost,
    ApiService,
    Meta,
)

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 280
DESCRIPTION_FALLBACK = "Details coming soon."

_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_SEPARATOR_RE = re.compile(r"[-_]")
_WORD_START_RE = re.compile(r"\b\w")


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _present(value: str | None) -> str | None:
    """Return *value* unless it is None or blank."""
    if value is None or not value.strip():
        return None
    return value


def _first_present(*values: str | None) -> str | None:
    for value in values:
        if _present(value) is not None:
            return value
    return None


def random_id() -> str:
    """Generate a random token for items with no usable identifier."""
    return uuid.uuid4().hex


def humanize_slug(slug: str) -> str:
    """Turn ``"my-slug"`` into ``"My Slug"``."""
    spaced = _SLUG_SEPARATOR_RE.sub(" ", slug)
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), spaced)


def strip_html(value: str | None) -> str:
    """Drop markup tags and collapse whitespace."""
    if not value:
        return ""
    text = _TAG_RE.sub("", value)
    return _WHITESPACE_RE.sub(" ", text).strip()


def fallback_description(primary: str | None, secondary: str | None) -> str:
    """Card summary text: primary source, else secondary, else a placeholder."""
    first = strip_html(primary)
    if first:
        return first[:MAX_DESCRIPTION_LENGTH]
    fallback = strip_html(secondary)[:MAX_DESCRIPTION_LENGTH]
    return fallback or DESCRIPTION_FALLBACK


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp; fall back to the current time.

    Naive timestamps are treated as UTC so every normalized date is
    comparable with every other.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Unparseable timestamp %r, using current time", value)
            return datetime.now(timezone.utc)
    else:
        return datetime.now(timezone.utc)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def coerce_sort_order(value: Any) -> int:
    """Use an integer sort order as-is; anything else sorts last.

    Integral floats (``3.0``) become ints. Fractional numbers such as ``2.5``,
    bools and numeric strings are not treated as sort orders and get
    ``SORT_ORDER_LAST``.
    """
    if isinstance(value, bool):
        return SORT_ORDER_LAST
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return SORT_ORDER_LAST


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_meta(meta: Meta) -> list[str]:
    """Flatten tag/meta collections into a list of strings.

    Arrays pass through as strings (empty entries dropped); objects become
    ``"key: value"`` entries; null or absent becomes an empty list.
    """
    if not meta:
        return []
    if isinstance(meta, dict):
        return [f"{key}: {_stringify(value)}" for key, value in meta.items()]
    return [text for text in (_stringify(item) for item in meta) if text]


def _slug_or_id(slug: str | None, item_id: int | str | None) -> str:
    present = _present(slug)
    if present is not None:
        return present
    if item_id is not None and str(item_id):
        return str(item_id)
    return random_id()


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _validate(adapter: TypeAdapter, payload: Any, label: str) -> Any:
    try:
        return adapter.validate_python(payload)
    except ValidationError as e:
        raise ContentValidationError(
            f"Invalid {label} payload: {e.error_count()} error(s)",
            errors=e.errors(include_url=False),
        ) from e


def validate_posts(payload: Any) -> list[ApiPost]:
    return _validate(POSTS_PAYLOAD, payload, "posts")


def validate_portfolio(payload: Any) -> list[ApiPortfolioProject]:
    return _validate(PORTFOLIO_PAYLOAD, payload, "portfolio")


def validate_services(payload: Any) -> list[ApiService]:
    return _validate(SERVICES_PAYLOAD, payload, "services")


def validate_about(payload: Any) -> ApiAboutContent | None:
    return _validate(ABOUT_PAYLOAD, payload, "about")


def validate_homepage(payload: Any) -> ApiHomepageContent | None:
    return _validate(HOMEPAGE_PAYLOAD, payload, "homepage")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


def normalize_post(post: ApiPost) -> Post:
    slug = _slug_or_id(post.slug, post.id)
    return Post(
        id=post.id,
        title=_first_present(post.title) or humanize_slug(slug),
        slug=slug,
        excerpt=post.excerpt or "",
        body=post.body or "",
        published_at=parse_timestamp(post.published_at),
        cover_image_url=post.cover_image_url,
    )


def normalize_project(project: ApiPortfolioProject) -> PortfolioProject:
    slug = _slug_or_id(project.slug, project.id)
    return PortfolioProject(
        id=project.id,
        title=_first_present(project.title, project.tagline) or humanize_slug(slug),
        slug=slug,
        tagline=project.tagline or "",
        summary=project.summary or "",
        body=project.body or "",
        thumbnail_url=project.thumbnail_url,
        hero_image_url=project.hero_image_url,
        project_url=project.project_url,
        source_url=project.source_url,
        tags=normalize_meta(project.tags),
        is_featured=bool(project.is_featured),
        sort_order=coerce_sort_order(project.sort_order),
        published_at=parse_timestamp(project.published_at),
    )


def normalize_service(service: ApiService) -> Service:
    return Service(
        slug=service.slug,
        title=_first_present(service.title, service.subtitle)
        or humanize_slug(service.slug),
        subtitle=service.subtitle,
        excerpt=service.excerpt,
        body=service.body or "",
        cover_image_url=service.cover_image_url,
        is_featured=bool(service.is_featured),
        sort_order=coerce_sort_order(service.sort_order),
    )


def normalize_about(payload: ApiAboutContent | None) -> AboutContent:
    """Map about content; a missing payload yields the built-in default."""
    if payload is None:
        return DEFAULT_ABOUT_CONTENT
    return AboutContent(
        title=_first_present(payload.title) or DEFAULT_ABOUT_CONTENT.title,
        summary=_first_present(payload.summary, payload.excerpt) or "",
        body=_first_present(payload.body, payload.content) or "",
        hero_image_url=payload.hero_image_url,
        cta_label=payload.cta_label,
        cta_url=payload.cta_url,
        skills=normalize_meta(payload.skills),
    )


# ---------------------------------------------------------------------------
# Homepage cards
# ---------------------------------------------------------------------------


def _card_id(item_id: int | str | None, slug: str | None) -> str:
    if item_id is not None and str(item_id):
        return str(item_id)
    return slug if slug else random_id()


def _section_href(section: str, slug: str | None) -> str:
    return f"/{section}/{slug}" if slug else f"/{section}"


def to_service_card(service: ApiHomepageService | None) -> HomepageCard:
    service = service or ApiHomepageService()
    slug = _present(service.slug)
    title = _first_present(service.title, service.subtitle) or (
        humanize_slug(slug) if slug else "Service"
    )
    return HomepageCard(
        id=_card_id(None, slug),
        title=title,
        description=fallback_description(service.excerpt, service.body),
        cover_image_url=service.cover_image_url,
        href=_section_href("services", slug),
        tags=normalize_meta(service.meta),
        is_featured=bool(service.is_featured),
    )


def to_portfolio_card(portfolio: ApiHomepagePortfolio | None) -> HomepageCard:
    portfolio = portfolio or ApiHomepagePortfolio()
    slug = _present(portfolio.slug)
    return HomepageCard(
        id=_card_id(portfolio.id, slug),
        title=_first_present(portfolio.title, portfolio.tagline) or "Portfolio",
        description=fallback_description(portfolio.summary, portfolio.body),
        cover_image_url=portfolio.thumbnail_url or portfolio.hero_image_url,
        href=_section_href("portfolio", slug),
        tags=normalize_meta(portfolio.tags),
        is_featured=bool(portfolio.is_featured),
    )


def to_blog_card(post: ApiHomepagePost | None) -> HomepageCard:
    post = post or ApiHomepagePost()
    slug = _present(post.slug)
    return HomepageCard(
        id=_card_id(post.id, slug),
        title=_first_present(post.title) or "Blog post",
        description=fallback_description(post.excerpt, post.body),
        cover_image_url=post.cover_image_url,
        href=_section_href("blog", slug),
    )


def normalize_homepage(payload: ApiHomepageContent | None) -> HomepageContent:
    payload = payload or ApiHomepageContent()
    posts = payload.posts if payload.posts is not None else payload.blogs
    return HomepageContent(
        portfolios=[to_portfolio_card(p) for p in payload.portfolios or []],
        services=[to_service_card(s) for s in payload.services or []],
        blogs=[to_blog_card(p) for p in posts or []],
    )


# ---------------------------------------------------------------------------
# Raw payload -> view model
# ---------------------------------------------------------------------------


def load_posts(payload: Any) -> list[Post]:
    return [normalize_post(p) for p in validate_posts(payload)]


def load_portfolio(payload: Any) -> list[PortfolioProject]:
    return [normalize_project(p) for p in validate_portfolio(payload)]


def load_services(payload: Any) -> list[Service]:
    return [normalize_service(s) for s in validate_services(payload)]


def load_about(payload: Any) -> AboutContent:
    return normalize_about(validate_about(payload))


def load_homepage(payload: Any) -> HomepageContent:
    return normalize_homepage(validate_homepage(payload))
