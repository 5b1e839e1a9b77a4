"""Recorded keystroke flow against a TodoMVC-style "new todo" input."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from playwright.async_api import Browser, Page

from todobench.core.contracts import ResolveOptions, SelectorSet
from todobench.core.playwright_host import PlaywrightContext, PlaywrightElement
from todobench.core.resolver import wait_for_selectors
from todobench.core.viewport import scroll_into_view_if_needed
from todobench.harness.artifacts import ArtifactPaths, ArtifactRecord, PerformanceTrace, render_pdf
from todobench.harness.config import TargetConfig
from todobench.harness.telemetry import Telemetry

logger = logging.getLogger("todobench.scenario")

TODO_INPUT_SELECTORS: SelectorSet = (
    ("aria/What needs to be done?",),
    ("#root > section > header > input",),
)
CLICK_OFFSET = (298, 22)


@dataclass(frozen=True)
class ScenarioOutcome:
    words_typed: int
    keystrokes: int
    artifacts: tuple[ArtifactRecord, ...]


class TodoInputScenario:
    def __init__(
        self,
        words: Sequence[str],
        timeout_ms: int = 5_000,
        selectors: SelectorSet = TODO_INPUT_SELECTORS,
        click_offset: tuple[float, float] = CLICK_OFFSET,
    ) -> None:
        self._words = list(words)
        self._timeout_ms = timeout_ms
        self._selectors = selectors
        self._click_offset = click_offset

    async def _focus_input(self, page: Page) -> PlaywrightElement:
        element = await wait_for_selectors(
            self._selectors,
            PlaywrightContext(page),
            ResolveOptions(timeout_ms=self._timeout_ms, visible=True),
        )
        await scroll_into_view_if_needed(element, self._timeout_ms)
        await element.click(*self._click_offset)
        return element

    async def _type_words(self, page: Page, element: PlaywrightElement, telemetry: Telemetry) -> int:
        keystrokes = 0
        for word in self._words:
            for letter in word:
                await page.keyboard.down(letter)
                keystrokes += 1
            await page.keyboard.down("Enter")
            keystrokes += 1
            await element.click(*self._click_offset)
            telemetry.incr("words_typed")
        telemetry.incr("keystrokes", keystrokes)
        return keystrokes

    async def run(
        self,
        browser: Browser,
        page: Page,
        target: TargetConfig,
        paths: ArtifactPaths,
        telemetry: Telemetry,
    ) -> ScenarioOutcome:
        await page.goto(target.url, wait_until="load")
        telemetry.event("navigated", {"url": target.url})

        trace = PerformanceTrace(browser, page, paths)
        await trace.start()
        telemetry.event("trace_started")
        try:
            await self._focus_input(page)
            element = await self._focus_input(page)
            telemetry.event("input_focused")

            keystrokes = await self._type_words(page, element, telemetry)
            await page.keyboard.up("Enter")
            telemetry.event("typing_done", {"words": len(self._words), "keystrokes": keystrokes})
        except Exception:
            try:
                await trace.stop()
            except Exception:
                logger.exception("%s: stopping trace after failure also failed", target.name)
            raise
        trace_record = await trace.stop()
        telemetry.event("trace_stopped")

        pdf_record = await render_pdf(page, paths)
        telemetry.event("pdf_rendered")

        artifacts = tuple(record for record in (trace_record, pdf_record) if record is not None)
        logger.info("%s: typed %d words (%d keystrokes)", target.name, len(self._words), keystrokes)
        return ScenarioOutcome(words_typed=len(self._words), keystrokes=keystrokes, artifacts=artifacts)
