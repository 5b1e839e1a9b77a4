from __future__ import annotations

import logging

from todobench.core.capabilities import ElementHandleLike
from todobench.core.contracts import DEFAULT_TIMEOUT_MS
from todobench.core.polling import wait_for_function

logger = logging.getLogger("todobench.viewport")

SCROLL_INTO_VIEW_SCRIPT = """
(element) => {
  element.scrollIntoView({ block: "center", inline: "center", behavior: "auto" });
}
"""


async def wait_for_connected(element: ElementHandleLike, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
    await wait_for_function(element.is_connected, timeout_ms, description="element connected")


async def wait_for_in_viewport(element: ElementHandleLike, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
    async def _intersecting() -> bool:
        return await element.is_in_viewport(threshold=0)

    await wait_for_function(_intersecting, timeout_ms, description="element in viewport")


async def scroll_into_view_if_needed(element: ElementHandleLike, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> bool:
    """Scroll ``element`` to the viewport centre unless it is already visible.

    Returns True when a scroll was requested.
    """
    if await element.is_in_viewport(threshold=0):
        return False

    await wait_for_connected(element, timeout_ms)
    logger.debug("scrolling element into view")
    await element.evaluate_in_page(SCROLL_INTO_VIEW_SCRIPT)
    await wait_for_in_viewport(element, timeout_ms)
    return True
