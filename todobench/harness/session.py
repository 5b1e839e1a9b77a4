from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from todobench.core.selector_engines import register_selector_engines

logger = logging.getLogger("todobench.session")


@dataclass(frozen=True)
class SessionConfig:
    headless: bool = True
    viewport_width: int = 834
    viewport_height: int = 1007
    default_timeout_ms: int = 5_000
    extra_chromium_args: tuple[str, ...] = (
        "--disable-background-networking",
        "--disable-renderer-backgrounding",
        "--disable-background-timer-throttling",
        "--disable-breakpad",
        "--disable-component-update",
    )


class BrowserSession:
    """One browser, one context, one page. Use as ``async with BrowserSession(cfg) as session``."""

    def __init__(self, config: SessionConfig | None = None) -> None:
        self._config = config or SessionConfig()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    @property
    def browser(self) -> Browser:
        if not self._browser:
            raise RuntimeError("Browser not initialized")
        return self._browser

    @property
    def page(self) -> Page:
        if not self._page:
            raise RuntimeError("Page not initialized")
        return self._page

    async def start(self) -> "BrowserSession":
        if self._browser:
            return self
        self._playwright = await async_playwright().start()
        await register_selector_engines(self._playwright)
        self._browser = await self._playwright.chromium.launch(
            headless=self._config.headless,
            args=list(self._config.extra_chromium_args),
        )
        self._context = await self._browser.new_context(
            viewport={"width": self._config.viewport_width, "height": self._config.viewport_height},
        )
        self._page = await self._context.new_page()
        self._page.set_default_timeout(self._config.default_timeout_ms)
        logger.debug(
            "browser started headless=%s viewport=%dx%d",
            self._config.headless,
            self._config.viewport_width,
            self._config.viewport_height,
        )
        return self

    async def close(self) -> None:
        if self._context:
            await self._context.close()
            self._context = None
            self._page = None
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    async def __aenter__(self) -> "BrowserSession":
        try:
            return await self.start()
        except Exception:
            await self.close()
            raise

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
