from __future__ import annotations

from typing import TypeVar

__all__ = ["max_of"]

T = TypeVar("T")


def max_of(i: T, j: T) -> T:
    """Return the greater of two values; on a tie the second one wins."""
    return i if i > j else j
