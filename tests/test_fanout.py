"""Tests for fail-fast fan-out."""

import asyncio

import pytest
from schema_introspection.catalog.fanout import fan_out


def delayed(value, delay, log=None):
    async def run():
        await asyncio.sleep(delay)
        if log is not None:
            log.append(value)
        return value

    return run


def failing(error, delay=0):
    async def run():
        await asyncio.sleep(delay)
        raise error

    return run


@pytest.mark.asyncio
async def test_results_follow_input_order_not_completion_order():
    completed = []
    factories = [delayed("a", 0.03, completed), delayed("b", 0.0, completed), delayed("c", 0.01, completed)]

    results = await fan_out(factories)

    assert results == ["a", "b", "c"]
    assert completed == ["b", "c", "a"]


@pytest.mark.asyncio
async def test_empty_input():
    assert await fan_out([]) == []
    assert await fan_out([], concurrent=False) == []


@pytest.mark.asyncio
async def test_sequential_mode_runs_in_order():
    completed = []
    factories = [delayed("a", 0.02, completed), delayed("b", 0.0, completed)]

    results = await fan_out(factories, concurrent=False)

    assert results == ["a", "b"]
    assert completed == ["a", "b"]


@pytest.mark.asyncio
async def test_first_failure_cancels_siblings():
    cancelled = []

    def slow(name):
        async def run():
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(name)
                raise
            return name

        return run

    error = LookupError("boom")
    with pytest.raises(LookupError) as exc_info:
        await asyncio.wait_for(fan_out([slow("a"), failing(error), slow("b")]), timeout=5)

    assert exc_info.value is error
    assert sorted(cancelled) == ["a", "b"]


@pytest.mark.asyncio
async def test_failure_is_raised_unwrapped():
    """The caller sees the original exception, not an exception group."""
    with pytest.raises(KeyError):
        await fan_out([delayed(1, 0), failing(KeyError("x"))])


@pytest.mark.asyncio
async def test_first_failing_input_wins_when_several_fail_together():
    first = ValueError("first")
    second = ValueError("second")
    with pytest.raises(ValueError) as exc_info:
        await fan_out([failing(first), failing(second)])
    assert exc_info.value is first


@pytest.mark.asyncio
async def test_sequential_mode_stops_at_first_failure():
    started = []

    def tracked(name, error=None):
        async def run():
            started.append(name)
            if error is not None:
                raise error
            return name

        return run

    with pytest.raises(RuntimeError):
        await fan_out([tracked("a"), tracked("b", RuntimeError("b")), tracked("c")], concurrent=False)
    assert started == ["a", "b"]


@pytest.mark.asyncio
async def test_outer_cancellation_reaches_children():
    cancelled = []

    async def child():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise

    task = asyncio.ensure_future(fan_out([lambda: child(), lambda: child()]))
    await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert cancelled == [True, True]


@pytest.mark.asyncio
async def test_nested_fan_out_fails_fast_across_levels():
    cancelled = []

    async def slow_leaf():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append("leaf")
            raise

    async def parent_ok():
        return await fan_out([lambda: slow_leaf()])

    async def parent_failing():
        await asyncio.sleep(0.01)
        raise OSError("down")

    with pytest.raises(OSError):
        await asyncio.wait_for(fan_out([lambda: parent_ok(), lambda: parent_failing()]), timeout=5)
    assert cancelled == ["leaf"]
