"""Host capabilities the resolver and waiters are written against.

Anything that can search for selectors and hand back element handles can be
plugged in: the Playwright adapters in ``playwright_host`` for real runs, an
in-memory DOM in the tests.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from todobench.core.contracts import ResolveOptions


@runtime_checkable
class SearchContext(Protocol):
    async def find_first(self, selector: str) -> Optional["ElementHandleLike"]:
        ...

    async def find_all(self, selector: str) -> list["ElementHandleLike"]:
        ...

    async def wait_for(self, selector: str, options: ResolveOptions) -> Optional["ElementHandleLike"]:
        """Wait until ``selector`` matches in this context; raise WaitTimeoutError on expiry."""
        ...

    async def shadow_root_or_self(self) -> "SearchContext":
        ...


@runtime_checkable
class ElementHandleLike(SearchContext, Protocol):
    async def is_connected(self) -> bool:
        ...

    async def is_in_viewport(self, threshold: float = 0.0) -> bool:
        ...

    async def evaluate_in_page(self, expression: str, arg: Any = None) -> Any:
        ...
