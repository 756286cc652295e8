"""
Instrumented elements for observing what an algorithm does.

`Tagged` records compare by key only, so equal keys with different tags let
tests check stability. When they share a `ComparisonCounter`, every `<`
between them is counted, which exposes best/worst-case behaviour without
timing anything.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

__all__ = ["ComparisonCounter", "Tagged", "tag_sequence"]


@dataclass
class ComparisonCounter:
    count: int = 0

    def reset(self) -> None:
        self.count = 0


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Tagged:
    """A sortable record: ordered and hashed by `key`, identified by `tag`."""

    key: Any
    tag: Any = None
    counter: Optional[ComparisonCounter] = field(default=None, repr=False, compare=False)

    def __lt__(self, other: "Tagged") -> bool:
        if not isinstance(other, Tagged):
            return NotImplemented
        if self.counter is not None:
            self.counter.count += 1
        return self.key < other.key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tagged):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


def tag_sequence(
    keys: Iterable[Any], counter: Optional[ComparisonCounter] = None
) -> List[Tagged]:
    """Wrap `keys` as `Tagged` records tagged with their original positions."""
    return [Tagged(key, tag, counter) for tag, key in enumerate(keys)]
