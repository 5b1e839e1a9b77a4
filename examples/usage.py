"""
Example usage of the todobench resolver.

Resolves elements on a live to-do app by selector set, pierces a shadow root
with a selector chain and waits for todo items to appear.
"""

import asyncio
import logging
import os

from todobench.core import (
    ResolveOptions,
    query_selectors_all,
    scroll_into_view_if_needed,
    wait_for_element,
    wait_for_selectors,
)
from todobench.core.playwright_host import PlaywrightContext
from todobench.harness import TODO_INPUT_SELECTORS, BrowserSession, SessionConfig

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

TODO_URL = os.getenv("TODO_URL", "http://localhost:8002")


async def example_add_todos():
    """Example: find the input, add a few todos, wait for them to render."""
    print("\n" + "="*60)
    print("Example 1: Add todos")
    print("="*60)

    async with BrowserSession(SessionConfig(headless=True)) as session:
        page = session.page
        await page.goto(TODO_URL)
        context = PlaywrightContext(page)

        element = await wait_for_selectors(TODO_INPUT_SELECTORS, context, ResolveOptions(timeout_ms=5000))
        await scroll_into_view_if_needed(element, 5000)
        await element.click()

        for word in ("buy milk", "walk dog", "write report"):
            await page.keyboard.type(word)
            await page.keyboard.press("Enter")

        count = await wait_for_element([[".todo-list li"], ["ul li"]], context, count=3)
        print(f"\nTodos rendered: {count}")


async def example_shadow_chain():
    """Example: a chain that crosses a shadow root without knowing where it is."""
    print("\n" + "="*60)
    print("Example 2: Shadow DOM chain")
    print("="*60)

    async with BrowserSession(SessionConfig(headless=True)) as session:
        page = session.page
        await page.set_content(
            "<todo-card></todo-card>"
            "<script>customElements.define('todo-card', class extends HTMLElement {"
            "connectedCallback() { this.attachShadow({mode: 'open'}).innerHTML ="
            " '<ul><li>one</li><li>two</li></ul>'; } });</script>"
        )
        items = await query_selectors_all([["todo-card", "ul", "li"]], PlaywrightContext(page))
        print(f"\nItems inside shadow root: {len(items)}")


async def main():
    await example_add_todos()
    await example_shadow_chain()


if __name__ == "__main__":
    asyncio.run(main())
