from __future__ import annotations

import json
from typing import Sequence


class ResolverError(Exception):
    """Base class for element resolution and waiting failures."""


class WaitTimeoutError(ResolverError):
    def __init__(self, timeout_ms: int, detail: str = "") -> None:
        self.timeout_ms = timeout_ms
        self.detail = detail
        message = f"Timed out after {timeout_ms}ms"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ElementNotFoundError(ResolverError):
    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        super().__init__("Could not find element: " + ">>".join(self.chain))


class NoSelectorsMatchedError(ResolverError):
    def __init__(self, selector_set: Sequence[Sequence[str]]) -> None:
        self.selector_set = tuple(tuple(chain) for chain in selector_set)
        payload = json.dumps([list(chain) for chain in self.selector_set])
        super().__init__("Could not find element for selectors: " + payload)


class InvalidSelectorError(ResolverError, ValueError):
    pass
