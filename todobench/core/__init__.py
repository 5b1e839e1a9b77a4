"""Element resolution and waiting primitives."""

from todobench.core.contracts import (
    DEFAULT_TIMEOUT_MS,
    POLL_INTERVAL_MS,
    CountOperator,
    ResolveOptions,
    SelectorChain,
    SelectorSet,
    normalize_chain,
    normalize_set,
)
from todobench.core.errors import (
    ElementNotFoundError,
    InvalidSelectorError,
    NoSelectorsMatchedError,
    ResolverError,
    WaitTimeoutError,
)
from todobench.core.polling import wait_for_function
from todobench.core.resolver import (
    query_selector_all,
    query_selectors_all,
    wait_for_element,
    wait_for_selector,
    wait_for_selectors,
)
from todobench.core.viewport import scroll_into_view_if_needed, wait_for_connected, wait_for_in_viewport

__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "POLL_INTERVAL_MS",
    "CountOperator",
    "ResolveOptions",
    "SelectorChain",
    "SelectorSet",
    "normalize_chain",
    "normalize_set",
    "ElementNotFoundError",
    "InvalidSelectorError",
    "NoSelectorsMatchedError",
    "ResolverError",
    "WaitTimeoutError",
    "wait_for_function",
    "query_selector_all",
    "query_selectors_all",
    "wait_for_element",
    "wait_for_selector",
    "wait_for_selectors",
    "scroll_into_view_if_needed",
    "wait_for_connected",
    "wait_for_in_viewport",
]
