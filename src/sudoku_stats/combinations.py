"""
Combinations Module - Every k-subset of the strategy roster.

Subsets keep roster order and come out lexicographically by index, the
same sequence as fixing the first member and recursing on the rest with
an increasing offset.
"""

import itertools
import math
from typing import Iterator, Sequence, Tuple, TypeVar

T = TypeVar("T")


def every_combination(roster: Sequence[T], k: int) -> Iterator[Tuple[T, ...]]:
    """
    Yield every size-k subset of roster exactly once.

    Args:
        roster: Ordered roster entries
        k: Subset size, at least 1

    Yields:
        Tuples of roster entries in roster order; nothing if k > len(roster)

    Raises:
        ValueError: If k < 1
    """
    if k < 1:
        raise ValueError(f"Combination size must be at least 1, got {k}")
    return itertools.combinations(roster, k)


def combination_count(roster_size: int, k: int) -> int:
    """Number of subsets every_combination yields (0 when k > roster_size)."""
    return math.comb(roster_size, k) if 0 <= k <= roster_size else 0
