"""On-disk content snapshots written by the prebuild fetch step.

The prebuild step stores the raw upstream JSON for each content key in a
single cache directory.  This module maps keys to file names and reads
those files back; it never writes them.
"""

import asyncio
import json
import re
from pathlib import Path
from typing import Any

from content_api.errors import CacheFileMalformed, CacheFileMissing

POSTS_CACHE_FILE = "remote-posts.json"
PORTFOLIO_CACHE_FILE = "remote-portfolios.json"
SERVICES_CACHE_FILE = "remote-services.json"
HOMEPAGE_CACHE_FILE = "content-homepage.json"

_SAFE_PATH_SEGMENT_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9._-]*$")


def validate_path_segment(segment: str) -> str:
    """Validate a caller-supplied file name segment.

    Rejects path traversal sequences, slashes and other unsafe characters.
    Returns the segment unchanged if valid; raises ValueError otherwise.
    """
    if not segment or ".." in segment or not _SAFE_PATH_SEGMENT_RE.match(segment):
        raise ValueError(f"Invalid cache key segment: {segment!r}")
    return segment


def about_cache_file(slug: str) -> str:
    """Snapshot file name for the about content of *slug*."""
    return f"content-about-{validate_path_segment(slug)}.json"


class DiskCache:
    """Read-only view of the snapshot directory.

    Usage::

        disk = DiskCache(".astro")
        disk.resolve(POSTS_CACHE_FILE)  # Path(".astro/remote-posts.json")
        payload = await disk.read(POSTS_CACHE_FILE)  # raises CacheMiss
    """

    def __init__(self, cache_dir: str | Path) -> None:
        self.cache_dir = Path(cache_dir)

    def resolve(self, file_name: str) -> Path:
        """Return the snapshot path for *file_name*. Does no I/O."""
        return self.cache_dir / file_name

    async def read(self, file_name: str) -> Any:
        """Read and parse a snapshot file.

        Raises:
            CacheFileMissing: The file is absent or cannot be read.
            CacheFileMalformed: The file exists but is not valid JSON.
        """
        path = self.resolve(file_name)
        try:
            raw = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError:
            raise CacheFileMissing(str(path), "not found") from None
        except UnicodeDecodeError as e:
            raise CacheFileMalformed(str(path), f"not UTF-8: {e}") from e
        except OSError as e:
            raise CacheFileMissing(str(path), f"unreadable: {e}") from e

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise CacheFileMalformed(str(path), f"invalid JSON: {e}") from e
