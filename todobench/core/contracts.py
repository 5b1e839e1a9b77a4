from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence, Union

from todobench.core.errors import InvalidSelectorError

SelectorChain = tuple[str, ...]
SelectorSet = tuple[SelectorChain, ...]
SelectorLike = Union[str, Sequence[str]]

DEFAULT_TIMEOUT_MS = 5_000
POLL_INTERVAL_MS = 100


class CountOperator(str, Enum):
    EQ = "=="
    GE = ">="
    LE = "<="

    @property
    def compare(self) -> Callable[[int, int], bool]:
        return _COMPARATORS[self]

    @classmethod
    def coerce(cls, value: "CountOperator | str") -> "CountOperator":
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidSelectorError(f"Unsupported count operator: {value!r}") from exc


_COMPARATORS: dict[CountOperator, Callable[[int, int], bool]] = {
    CountOperator.EQ: operator.eq,
    CountOperator.GE: operator.ge,
    CountOperator.LE: operator.le,
}


@dataclass(frozen=True)
class ResolveOptions:
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    visible: bool = True

    @property
    def state(self) -> str:
        return "visible" if self.visible else "attached"


def normalize_chain(selector: SelectorLike) -> SelectorChain:
    if isinstance(selector, str):
        return (selector,)
    chain = tuple(selector)
    if not chain:
        raise InvalidSelectorError("Empty selector chain")
    return chain


def normalize_set(selectors: Sequence[SelectorLike]) -> SelectorSet:
    if isinstance(selectors, str):
        selectors = [selectors]
    selector_set = tuple(normalize_chain(selector) for selector in selectors)
    if not selector_set:
        raise InvalidSelectorError("Empty selector set")
    return selector_set
