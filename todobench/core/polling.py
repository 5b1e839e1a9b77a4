from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from todobench.core.contracts import POLL_INTERVAL_MS
from todobench.core.errors import WaitTimeoutError

logger = logging.getLogger("todobench.polling")

Predicate = Callable[[], Awaitable[Any]]


async def wait_for_function(
    predicate: Predicate,
    timeout_ms: int,
    interval_ms: int = POLL_INTERVAL_MS,
    description: str = "",
) -> None:
    """Poll ``predicate`` until it returns something truthy.

    The deadline is fixed when the call starts. A predicate call still running
    when the deadline passes is cancelled and the wait fails with
    ``WaitTimeoutError``. The predicate always runs at least once.
    """
    if timeout_ms < 0:
        raise ValueError("timeout_ms must be >= 0")
    if interval_ms <= 0:
        raise ValueError("interval_ms must be > 0")

    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout_ms / 1000.0
    interval_s = interval_ms / 1000.0
    attempts = 0

    while True:
        remaining = deadline - loop.time()
        if attempts and remaining <= 0:
            break
        attempts += 1
        if remaining > 0:
            task = asyncio.ensure_future(predicate())
            try:
                await asyncio.wait({task}, timeout=remaining)
            finally:
                if not task.done():
                    task.cancel()
                    await asyncio.gather(task, return_exceptions=True)
            if task.cancelled():
                break
            result = task.result()
        else:
            result = await predicate()
        if result:
            return

        remaining = deadline - loop.time()
        if remaining <= 0:
            break
        await asyncio.sleep(min(interval_s, remaining))

    logger.debug("wait %s timed out after %d attempts", description or "<predicate>", attempts)
    raise WaitTimeoutError(timeout_ms, description)
