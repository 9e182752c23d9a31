"""
Unit tests for backends/memoize.py

Covers:
- single-flight: concurrent calls with one key run the function once
- failures are shared by concurrent callers, then evicted
- distinct keys each run the function
- completed results stay cached until clear()
"""
import asyncio

import pytest

from backends.memoize import AsyncMemoizer, memoize_async


class _Counter:
    def __init__(self, fail: bool = False) -> None:
        self.calls = 0
        self.fail = fail
        self.release = asyncio.Event()

    async def __call__(self, value):
        self.calls += 1
        await self.release.wait()
        if self.fail:
            raise RuntimeError(f"boom {value}")
        return value * 2


class TestSingleFlight:
    @pytest.mark.asyncio
    async def test_concurrent_same_key_calls_once(self):
        fn = _Counter()
        memo = AsyncMemoizer(fn, lambda value: value)

        first = memo(3)
        second = memo(3)
        assert first is second

        fn.release.set()
        results = await asyncio.gather(first, second)

        assert results == [6, 6]
        assert fn.calls == 1

    @pytest.mark.asyncio
    async def test_concurrent_failure_is_shared(self):
        fn = _Counter(fail=True)
        memo = AsyncMemoizer(fn, lambda value: value)

        first = memo(1)
        second = memo(1)
        fn.release.set()
        results = await asyncio.gather(first, second, return_exceptions=True)

        assert fn.calls == 1
        assert all(isinstance(r, RuntimeError) for r in results)
        assert results[0] is results[1]

    @pytest.mark.asyncio
    async def test_failed_entry_is_evicted_and_retried(self):
        fn = _Counter(fail=True)
        memo = AsyncMemoizer(fn, lambda value: value)
        fn.release.set()

        with pytest.raises(RuntimeError):
            await memo(1)
        await asyncio.sleep(0)
        assert 1 not in memo

        fn.fail = False
        assert await memo(1) == 2
        assert fn.calls == 2

    @pytest.mark.asyncio
    async def test_distinct_keys_call_separately(self):
        fn = _Counter()
        memo = AsyncMemoizer(fn, lambda value: value)
        fn.release.set()

        assert await asyncio.gather(memo(1), memo(2)) == [2, 4]
        assert fn.calls == 2
        assert len(memo) == 2

    @pytest.mark.asyncio
    async def test_completed_result_is_reused(self):
        fn = _Counter()
        memo = AsyncMemoizer(fn, lambda value: value)
        fn.release.set()

        assert await memo(5) == 10
        assert await memo(5) == 10
        assert fn.calls == 1


class TestClear:
    @pytest.mark.asyncio
    async def test_clear_forces_new_call(self):
        fn = _Counter()
        memo = AsyncMemoizer(fn, lambda value: value)
        fn.release.set()

        await memo(1)
        memo.clear()
        assert len(memo) == 0

        await memo(1)
        assert fn.calls == 2


class TestDecorator:
    @pytest.mark.asyncio
    async def test_key_fn_receives_call_arguments(self):
        calls = []

        @memoize_async(lambda query, variables: (query, tuple(sorted(variables.items()))))
        async def fetch(query, variables):
            calls.append((query, variables))
            return len(calls)

        assert await fetch("q", {"a": 1}) == 1
        assert await fetch("q", {"a": 1}) == 1
        assert await fetch("q", {"a": 2}) == 2
        assert len(calls) == 2
