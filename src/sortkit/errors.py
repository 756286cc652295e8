"""
Exception types raised by sortkit.

Incomparable elements are not wrapped: the `TypeError` raised by `<`
propagates to the caller unchanged.
"""

from __future__ import annotations

__all__ = ["SortError", "InvalidRangeError", "NotSortedError"]


class SortError(Exception):
    """Base class for sortkit errors."""


class InvalidRangeError(SortError, IndexError):
    """Explicit bounds fall outside the sequence or describe a negative-length range."""


class NotSortedError(SortError, AssertionError):
    """A post-condition check found an adjacent pair out of order."""
