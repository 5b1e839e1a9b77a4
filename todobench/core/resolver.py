"""Selector chain resolution across shadow DOM boundaries.

A chain such as ``("my-app", "todo-input", "input")`` is resolved one step at
a time. Every step after the first searches inside the shadow root of the
previous match when it has one, and inside the element itself otherwise, so
callers never need to know where the shadow boundaries are.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from todobench.core.capabilities import ElementHandleLike, SearchContext
from todobench.core.contracts import (
    DEFAULT_TIMEOUT_MS,
    CountOperator,
    ResolveOptions,
    SelectorLike,
    normalize_chain,
    normalize_set,
)
from todobench.core.errors import (
    ElementNotFoundError,
    NoSelectorsMatchedError,
    WaitTimeoutError,
)
from todobench.core.polling import wait_for_function

logger = logging.getLogger("todobench.resolver")


async def wait_for_selector(
    selector: SelectorLike,
    context: SearchContext,
    options: ResolveOptions | None = None,
) -> ElementHandleLike:
    chain = normalize_chain(selector)
    opts = options or ResolveOptions()

    scope: SearchContext = context
    element: Optional[ElementHandleLike] = None
    for index, part in enumerate(chain):
        try:
            element = await scope.wait_for(part, opts)
        except WaitTimeoutError as exc:
            raise ElementNotFoundError(chain) from exc
        if element is None:
            raise ElementNotFoundError(chain)
        if index < len(chain) - 1:
            scope = await element.shadow_root_or_self()

    if element is None:
        raise ElementNotFoundError(chain)
    return element


async def wait_for_selectors(
    selectors: Sequence[SelectorLike],
    context: SearchContext,
    options: ResolveOptions | None = None,
) -> ElementHandleLike:
    selector_set = normalize_set(selectors)
    for chain in selector_set:
        try:
            return await wait_for_selector(chain, context, options)
        except Exception as exc:
            logger.warning("selector chain %s failed: %s", ">>".join(chain), exc)
    raise NoSelectorsMatchedError(selector_set)


async def query_selector_all(selector: SelectorLike, context: SearchContext) -> list[ElementHandleLike]:
    chain = normalize_chain(selector)

    elements: list[ElementHandleLike] = []
    scopes: list[SearchContext] = [context]
    for index, part in enumerate(chain):
        elements = []
        for scope in scopes:
            elements.extend(await scope.find_all(part))
        if not elements:
            return []
        if index < len(chain) - 1:
            scopes = [await element.shadow_root_or_self() for element in elements]
    return elements


async def query_selectors_all(selectors: Sequence[SelectorLike], context: SearchContext) -> list[ElementHandleLike]:
    for chain in normalize_set(selectors):
        result = await query_selector_all(chain, context)
        if result:
            return result
    return []


async def wait_for_element(
    selectors: Sequence[SelectorLike],
    context: SearchContext,
    count: int = 1,
    operator: CountOperator | str = CountOperator.GE,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> int:
    """Wait until the number of matches for ``selectors`` satisfies ``operator`` against ``count``.

    Returns the count observed on the satisfying poll.
    """
    selector_set = normalize_set(selectors)
    comparator = CountOperator.coerce(operator)
    observed = 0

    async def _count_satisfied() -> bool:
        nonlocal observed
        observed = len(await query_selectors_all(selector_set, context))
        return comparator.compare(observed, count)

    await wait_for_function(
        _count_satisfied,
        timeout_ms,
        description=f"count {comparator.value} {count} for {list(selector_set)}",
    )
    return observed
