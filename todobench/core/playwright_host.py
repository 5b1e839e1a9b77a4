from __future__ import annotations

from typing import Any, Optional, Union

from playwright.async_api import ElementHandle, Frame, Page
from playwright.async_api import TimeoutError as PlaywrightTimeout

from todobench.core.contracts import ResolveOptions
from todobench.core.errors import WaitTimeoutError
from todobench.core.selector_engines import to_playwright_selector

SHADOW_ROOT_OR_SELF_SCRIPT = "(el) => el.shadowRoot ? el.shadowRoot : el"

IN_VIEWPORT_SCRIPT = """
async (element, threshold) => {
  const ratio = await new Promise((resolve) => {
    const observer = new IntersectionObserver((entries) => {
      resolve(entries[0].intersectionRatio);
      observer.disconnect();
    });
    observer.observe(element);
  });
  return threshold === 1 ? ratio === 1 : ratio > threshold;
}
"""

class _PlaywrightSearchMixin:
    _target: Union[Page, Frame, ElementHandle]

    async def find_first(self, selector: str) -> Optional["PlaywrightElement"]:
        handle = await self._target.query_selector(to_playwright_selector(selector))
        return PlaywrightElement(handle) if handle else None

    async def find_all(self, selector: str) -> list["PlaywrightElement"]:
        handles = await self._target.query_selector_all(to_playwright_selector(selector))
        return [PlaywrightElement(handle) for handle in handles]

    async def wait_for(self, selector: str, options: ResolveOptions) -> Optional["PlaywrightElement"]:
        try:
            handle = await self._target.wait_for_selector(
                to_playwright_selector(selector),
                state=options.state,
                timeout=options.timeout_ms,
            )
        except PlaywrightTimeout as exc:
            raise WaitTimeoutError(options.timeout_ms, f"selector {selector!r}") from exc
        return PlaywrightElement(handle) if handle else None


class PlaywrightContext(_PlaywrightSearchMixin):
    """Page or frame scope."""

    def __init__(self, target: Union[Page, Frame]) -> None:
        self._target = target

    async def shadow_root_or_self(self) -> "PlaywrightContext":
        return self


class PlaywrightElement(_PlaywrightSearchMixin):
    def __init__(self, handle: ElementHandle) -> None:
        self._target = handle

    @property
    def handle(self) -> ElementHandle:
        return self._target

    async def shadow_root_or_self(self) -> "PlaywrightElement":
        js_handle = await self._target.evaluate_handle(SHADOW_ROOT_OR_SELF_SCRIPT)
        scoped = js_handle.as_element()
        return PlaywrightElement(scoped) if scoped else self

    async def is_connected(self) -> bool:
        return bool(await self._target.evaluate("(el) => el.isConnected"))

    async def is_in_viewport(self, threshold: float = 0.0) -> bool:
        return bool(await self._target.evaluate(IN_VIEWPORT_SCRIPT, threshold))

    async def evaluate_in_page(self, expression: str, arg: Any = None) -> Any:
        return await self._target.evaluate(expression, arg)

    async def click(self, offset_x: float | None = None, offset_y: float | None = None) -> None:
        if offset_x is None or offset_y is None:
            await self._target.click()
            return
        await self._target.click(position={"x": offset_x, "y": offset_y})
