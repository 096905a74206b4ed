"""Fail-fast fan-out over sibling fetches."""

import asyncio
from typing import Awaitable, Callable, Iterable, List, TypeVar

T = TypeVar("T")


async def fan_out(
    factories: Iterable[Callable[[], Awaitable[T]]], concurrent: bool = True
) -> List[T]:
    """Run sibling fetches and collect their results in input order.

    In concurrent mode each fetch becomes a task. The first failure cancels
    every sibling still pending, waits for them to unwind and is re-raised
    as is. Sequential mode awaits the same fetches one after another.

    Args:
        factories: Zero-argument callables each returning an awaitable
        concurrent: Schedule siblings as concurrent tasks

    Returns:
        Results ordered like ``factories``, regardless of completion order
    """
    if not concurrent:
        results = []
        for factory in factories:
            results.append(await factory())
        return results

    tasks = [asyncio.ensure_future(factory()) for factory in factories]
    if not tasks:
        return []

    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        await _cancel_all(tasks)
        raise

    if pending:
        await _cancel_all(pending)

    failure = None
    for task in tasks:
        if task in done and not task.cancelled():
            error = task.exception()
            if error is not None and failure is None:
                failure = error
    if failure is not None:
        raise failure
    return [task.result() for task in tasks]


async def _cancel_all(tasks) -> None:
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
