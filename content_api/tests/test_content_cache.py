"""Tests for ContentCache: single-flight memoization, no I/O involved."""

import asyncio

import pytest

from content_api.services.content_cache import ContentCache


class CountingLoader:
    """Loader that records calls and can be held open until released."""

    def __init__(self, value=None, error: Exception | None = None) -> None:
        self.value = value if value is not None else {"items": [1, 2, 3]}
        self.error = error
        self.calls = 0
        self.release = asyncio.Event()
        self.release.set()

    async def __call__(self):
        self.calls += 1
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.value


async def test_get_returns_loaded_value():
    cache = ContentCache()
    loader = CountingLoader({"a": 1})
    assert await cache.get("k", loader) == {"a": 1}


async def test_sequential_calls_load_once_and_are_equal():
    cache = ContentCache()
    loader = CountingLoader()
    first = await cache.get("k", loader)
    second = await cache.get("k", loader)
    assert first == second
    assert loader.calls == 1


async def test_distinct_keys_load_independently():
    cache = ContentCache()
    a = CountingLoader({"v": "a"})
    b = CountingLoader({"v": "b"})
    assert await cache.get("a", a) == {"v": "a"}
    assert await cache.get(("about", "b"), b) == {"v": "b"}
    assert a.calls == 1
    assert b.calls == 1
    assert len(cache) == 2


async def test_concurrent_callers_share_one_load():
    cache = ContentCache()
    loader = CountingLoader()
    loader.release.clear()

    tasks = [asyncio.create_task(cache.get("k", loader)) for _ in range(10)]
    await asyncio.sleep(0.01)  # let every caller reach the in-flight load
    assert loader.calls == 1
    assert not any(t.done() for t in tasks)

    loader.release.set()
    results = await asyncio.gather(*tasks)
    assert loader.calls == 1
    assert all(r == {"items": [1, 2, 3]} for r in results)


async def test_each_caller_gets_an_independent_copy():
    cache = ContentCache()
    loader = CountingLoader({"items": [1, 2, 3]})

    first = await cache.get("k", loader)
    first["items"].append(4)
    first["extra"] = True

    second = await cache.get("k", loader)
    assert second == {"items": [1, 2, 3]}
    assert first is not second


async def test_concurrent_callers_get_distinct_copies():
    cache = ContentCache()
    loader = CountingLoader()
    a, b = await asyncio.gather(cache.get("k", loader), cache.get("k", loader))
    assert a == b
    assert a is not b
    assert a["items"] is not b["items"]


async def test_failure_is_memoized_by_default():
    cache = ContentCache()
    loader = CountingLoader(error=RuntimeError("boom"))

    with pytest.raises(RuntimeError, match="boom"):
        await cache.get("k", loader)
    with pytest.raises(RuntimeError, match="boom"):
        await cache.get("k", loader)
    assert loader.calls == 1
    assert "k" in cache


async def test_concurrent_callers_all_see_the_failure():
    cache = ContentCache()
    loader = CountingLoader(error=RuntimeError("boom"))
    loader.release.clear()

    tasks = [asyncio.create_task(cache.get("k", loader)) for _ in range(3)]
    await asyncio.sleep(0.01)
    loader.release.set()
    results = await asyncio.gather(*tasks, return_exceptions=True)

    assert loader.calls == 1
    assert all(isinstance(r, RuntimeError) for r in results)


async def test_retry_failed_drops_failed_entry():
    cache = ContentCache(retry_failed=True)
    failing = CountingLoader(error=RuntimeError("boom"))

    with pytest.raises(RuntimeError):
        await cache.get("k", failing)
    assert "k" not in cache

    succeeding = CountingLoader({"ok": True})
    assert await cache.get("k", succeeding) == {"ok": True}
    assert succeeding.calls == 1


async def test_cancelled_caller_does_not_cancel_shared_load():
    cache = ContentCache()
    loader = CountingLoader({"done": True})
    loader.release.clear()

    first = asyncio.create_task(cache.get("k", loader))
    second = asyncio.create_task(cache.get("k", loader))
    await asyncio.sleep(0.01)

    first.cancel()
    with pytest.raises(asyncio.CancelledError):
        await first

    loader.release.set()
    assert await second == {"done": True}
    assert loader.calls == 1


async def test_cancelling_a_cleared_load_keeps_the_new_entry():
    cache = ContentCache()
    old_loader = CountingLoader({"v": 1})
    old_loader.release.clear()
    new_loader = CountingLoader({"v": 2})
    new_loader.release.clear()

    old_caller = asyncio.create_task(cache.get("k", old_loader))
    await asyncio.sleep(0.01)
    old_task = cache._entries["k"]

    cache.clear()
    new_caller = asyncio.create_task(cache.get("k", new_loader))
    await asyncio.sleep(0.01)

    old_task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await old_caller

    assert "k" in cache
    new_loader.release.set()
    assert await new_caller == {"v": 2}
    assert await cache.get("k", new_loader) == {"v": 2}
    assert new_loader.calls == 1


async def test_clear_forces_a_new_load():
    cache = ContentCache()
    loader = CountingLoader()
    await cache.get("k", loader)
    cache.clear()
    await cache.get("k", loader)
    assert loader.calls == 2


async def test_stats_counts_hits_and_loads():
    cache = ContentCache()
    loader = CountingLoader()
    await cache.get("k", loader)
    await cache.get("k", loader)
    await cache.get("k", loader)
    assert cache.stats() == {"entries": 1, "hits": 2, "loads": 1}
