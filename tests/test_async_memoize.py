"""Tests for @memoize on async methods."""

import asyncio
import inspect

import pytest

from tagmemo import TagVersionRegistry, memoize


class TestAsyncMemoize:
    """Coroutine methods cache their awaited result."""

    async def test_caches_result_not_coroutine(self) -> None:
        calls = 0

        class Api:
            @memoize
            async def user(self, id: str) -> dict:
                nonlocal calls
                calls += 1
                await asyncio.sleep(0)
                return {"id": id}

        api = Api()
        assert await api.user("1") == {"id": "1"}
        assert await api.user("1") == {"id": "1"}
        assert calls == 1

    async def test_wrapper_is_a_coroutine_function(self) -> None:
        class Api:
            @memoize
            async def ping(self) -> str:
                return "pong"

        assert inspect.iscoroutinefunction(Api.ping)
        assert await Api().ping() == "pong"

    async def test_failure_not_cached(self) -> None:
        attempts = 0

        class Api:
            @memoize
            async def fetch(self, key: str) -> str:
                nonlocal attempts
                attempts += 1
                if attempts == 1:
                    raise TimeoutError("slow")
                return key

        api = Api()
        with pytest.raises(TimeoutError):
            await api.fetch("k")
        assert await api.fetch("k") == "k"
        assert attempts == 2

    async def test_tags(self, registry: TagVersionRegistry) -> None:
        calls = 0

        class Api:
            @memoize(tags=["users"], registry=registry)
            async def user(self, id: str) -> int:
                nonlocal calls
                calls += 1
                return calls

        api = Api()
        assert await api.user("1") == 1
        registry.invalidate(["users"])
        assert await api.user("1") == 2
        assert await api.user("1") == 2

    async def test_expiring(self, clock) -> None:
        calls = 0

        class Api:
            @memoize(expiring="100ms")
            async def user(self, id: str) -> int:
                nonlocal calls
                calls += 1
                return calls

        api = Api()
        assert await api.user("1") == 1
        clock.advance(100)
        assert await api.user("1") == 1
        clock.advance(1)
        assert await api.user("1") == 2
