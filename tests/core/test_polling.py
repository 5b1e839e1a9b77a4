import asyncio
import time

import pytest

from todobench.core.errors import WaitTimeoutError
from todobench.core.polling import wait_for_function


@pytest.mark.asyncio
async def test_returns_once_predicate_is_truthy() -> None:
    calls = 0

    async def predicate() -> int:
        nonlocal calls
        calls += 1
        return calls >= 3

    await wait_for_function(predicate, timeout_ms=2_000, interval_ms=10)

    assert calls == 3


@pytest.mark.asyncio
async def test_truthy_values_other_than_bool_count() -> None:
    async def predicate() -> list[str]:
        return ["element"]

    assert await wait_for_function(predicate, timeout_ms=100) is None


@pytest.mark.asyncio
async def test_timeout_boundary() -> None:
    calls = 0

    async def never() -> bool:
        nonlocal calls
        calls += 1
        return False

    started = time.monotonic()
    with pytest.raises(WaitTimeoutError) as excinfo:
        await wait_for_function(never, timeout_ms=300)
    elapsed = time.monotonic() - started

    assert elapsed >= 0.299
    assert elapsed <= 0.3 + 0.1 + 0.15
    assert excinfo.value.timeout_ms == 300
    # one call at t=0 plus one per 100ms interval
    assert 3 <= calls <= 4


@pytest.mark.asyncio
async def test_slow_predicate_is_cancelled_at_deadline() -> None:
    cancelled = asyncio.Event()

    async def slow() -> bool:
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        return True

    started = time.monotonic()
    with pytest.raises(WaitTimeoutError):
        await wait_for_function(slow, timeout_ms=200)

    assert time.monotonic() - started < 1.0
    assert cancelled.is_set()


@pytest.mark.asyncio
async def test_zero_timeout_still_invokes_predicate_once() -> None:
    calls = 0

    async def predicate() -> bool:
        nonlocal calls
        calls += 1
        return True

    await wait_for_function(predicate, timeout_ms=0)

    assert calls == 1


@pytest.mark.asyncio
async def test_zero_timeout_falsy_predicate_times_out() -> None:
    async def predicate() -> bool:
        return False

    with pytest.raises(WaitTimeoutError):
        await wait_for_function(predicate, timeout_ms=0)


@pytest.mark.asyncio
async def test_predicate_errors_propagate() -> None:
    async def broken() -> bool:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        await wait_for_function(broken, timeout_ms=500)


@pytest.mark.asyncio
async def test_rejects_negative_timeout() -> None:
    async def predicate() -> bool:
        return True

    with pytest.raises(ValueError):
        await wait_for_function(predicate, timeout_ms=-1)


@pytest.mark.asyncio
async def test_description_in_timeout_message() -> None:
    async def never() -> bool:
        return False

    with pytest.raises(WaitTimeoutError, match="element in viewport"):
        await wait_for_function(never, timeout_ms=50, description="element in viewport")


@pytest.mark.asyncio
async def test_predicate_raising_timeout_error_propagates() -> None:
    async def flaky() -> bool:
        raise TimeoutError("socket read timed out")

    started = time.monotonic()
    with pytest.raises(TimeoutError, match="socket read timed out") as excinfo:
        await wait_for_function(flaky, timeout_ms=5_000)

    assert not isinstance(excinfo.value, WaitTimeoutError)
    assert time.monotonic() - started < 1.0


@pytest.mark.asyncio
async def test_outer_cancellation_cancels_in_flight_predicate() -> None:
    started = asyncio.Event()
    cancelled = asyncio.Event()

    async def slow() -> bool:
        started.set()
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        return True

    waiter = asyncio.create_task(wait_for_function(slow, timeout_ms=5_000))
    await started.wait()
    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    assert cancelled.is_set()
