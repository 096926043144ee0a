"""Content repository: disk-first, memoized access to every content type.

Each accessor resolves through the shared ``ContentCache``: on the first
call for a key it reads the prebuild snapshot from disk, falls back to the
upstream API if the snapshot is missing or unusable, normalizes the raw
payload, and memoizes the result.  Listing order is not applied here; use
``content_api.services.ordering`` on the returned lists.
"""

import logging
from collections.abc import Callable, Hashable
from typing import Any, TypeVar

from content_api.config import Settings
from content_api.errors import (
    CacheFileMalformed,
    CacheFileMissing,
    ContentValidationError,
)
from content_api.models.content import (
    AboutContent,
    HomepageContent,
    PortfolioProject,
    Post,
    Service,
)
from content_api.services import normalizers
from content_api.services.content_cache import ContentCache
from content_api.services.disk_cache import (
    HOMEPAGE_CACHE_FILE,
    PORTFOLIO_CACHE_FILE,
    POSTS_CACHE_FILE,
    SERVICES_CACHE_FILE,
    DiskCache,
    about_cache_file,
)
from content_api.services.remote import (
    ABOUT_ENDPOINT,
    HOMEPAGE_ENDPOINT,
    PORTFOLIO_ENDPOINT,
    POSTS_ENDPOINT,
    SERVICES_ENDPOINT,
    RemoteFetcher,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ABOUT_SLUG = "default"


class ContentRepository:
    """Typed accessors over the content cache."""

    def __init__(
        self, cache: ContentCache, disk: DiskCache, fetcher: RemoteFetcher
    ) -> None:
        self.cache = cache
        self.disk = disk
        self.fetcher = fetcher

    async def _resolve(
        self,
        label: str,
        cache_file: str,
        endpoint: str,
        load: Callable[[Any], T],
        params: dict[str, str] | None = None,
    ) -> T:
        """Load one content key: snapshot first, then the upstream API."""
        try:
            result = load(await self.disk.read(cache_file))
        except CacheFileMissing as e:
            logger.debug("No %s snapshot (%s), fetching from API", label, e.reason)
        except CacheFileMalformed as e:
            logger.warning("Ignoring malformed %s snapshot: %s", label, e)
        except ContentValidationError as e:
            logger.warning(
                "Ignoring %s snapshot %s: %s",
                label,
                self.disk.resolve(cache_file),
                e,
            )
        else:
            logger.info("Loaded %s from %s", label, self.disk.resolve(cache_file))
            return result

        payload = await self.fetcher.get_json(endpoint, params)
        result = load(payload)
        logger.info("Loaded %s from %s", label, endpoint)
        return result

    async def _get(
        self,
        key: Hashable,
        cache_file: str,
        endpoint: str,
        load: Callable[[Any], T],
        params: dict[str, str] | None = None,
    ) -> T:
        label = key if isinstance(key, str) else "/".join(map(str, key))
        return await self.cache.get(
            key, lambda: self._resolve(label, cache_file, endpoint, load, params)
        )

    # -- posts -------------------------------------------------------------

    async def get_posts(self) -> list[Post]:
        return await self._get(
            "posts", POSTS_CACHE_FILE, POSTS_ENDPOINT, normalizers.load_posts
        )

    async def get_post(self, slug_or_id: str) -> Post | None:
        """Find a post by slug or by its stringified id."""
        for post in await self.get_posts():
            if post.slug == slug_or_id or str(post.id) == slug_or_id:
                return post
        return None

    # -- portfolio ---------------------------------------------------------

    async def get_portfolio_projects(self) -> list[PortfolioProject]:
        return await self._get(
            "portfolio",
            PORTFOLIO_CACHE_FILE,
            PORTFOLIO_ENDPOINT,
            normalizers.load_portfolio,
        )

    async def get_portfolio_project(self, slug_or_id: str) -> PortfolioProject | None:
        """Find a project by slug or by its stringified id."""
        for project in await self.get_portfolio_projects():
            if project.slug == slug_or_id or str(project.id) == slug_or_id:
                return project
        return None

    # -- services ----------------------------------------------------------

    async def get_services(self) -> list[Service]:
        return await self._get(
            "services",
            SERVICES_CACHE_FILE,
            SERVICES_ENDPOINT,
            normalizers.load_services,
        )

    async def get_service(self, slug: str) -> Service | None:
        for service in await self.get_services():
            if service.slug == slug:
                return service
        return None

    # -- pages -------------------------------------------------------------

    async def get_about(self, slug: str = DEFAULT_ABOUT_SLUG) -> AboutContent:
        """About content for *slug*; each slug is memoized separately.

        Raises ValueError for slugs that are not safe file name segments.
        """
        cache_file = about_cache_file(slug)
        return await self._get(
            ("about", slug),
            cache_file,
            ABOUT_ENDPOINT,
            normalizers.load_about,
            params={"slug": slug},
        )

    async def get_homepage(self) -> HomepageContent:
        return await self._get(
            "homepage",
            HOMEPAGE_CACHE_FILE,
            HOMEPAGE_ENDPOINT,
            normalizers.load_homepage,
        )

    async def aclose(self) -> None:
        """Release the HTTP client and drop memoized content."""
        self.cache.clear()
        await self.fetcher.aclose()


def create_repository(settings: Settings) -> ContentRepository:
    """Build a repository wired from application settings."""
    return ContentRepository(
        cache=ContentCache(retry_failed=settings.retry_failed_loads),
        disk=DiskCache(settings.content_cache_dir),
        fetcher=RemoteFetcher(
            settings.blog_api_base_url, timeout=settings.http_timeout
        ),
    )
