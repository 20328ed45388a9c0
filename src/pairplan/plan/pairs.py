"""
Pair Universe: every unordered pair of items, and covered-pair bookkeeping.

A pair is stored in canonical form (the two items sorted), so (a, b) and
(b, a) hash to the same key and membership tests are constant time.
"""

import logging
import math
from typing import Dict, FrozenSet, Iterator, List, Sequence, Set, Tuple

logger = logging.getLogger(__name__)

Pair = Tuple[str, str]
Group = List[str]
Plan = List[Group]


def make_pair(a: str, b: str) -> Pair:
    """Canonical pair key: (a, b) and (b, a) give the same tuple."""
    return (a, b) if a <= b else (b, a)


def group_pairs(group: Sequence[str]) -> Iterator[Pair]:
    """Yield every pair formed inside a group, C(g, 2) of them."""
    for i in range(len(group)):
        for k in range(i + 1, len(group)):
            yield make_pair(group[i], group[k])


def build_pair_universe(items: Sequence[str]) -> FrozenSet[Pair]:
    """
    Build the complete set of unordered item pairs.

    Args:
        items: Ordered item universe (distinct names)

    Returns:
        Frozen set of C(N, 2) canonical pairs (empty when N < 2)

    Raises:
        ValueError: If the item list contains duplicates
    """
    if len(set(items)) != len(items):
        raise ValueError("Item universe contains duplicate items")

    universe = set()
    for i in range(len(items)):
        for k in range(i + 1, len(items)):
            universe.add(make_pair(items[i], items[k]))

    logger.debug(f"Pair universe: {len(items)} items, {len(universe)} pairs")
    return frozenset(universe)


def pair_lower_bound(item_count: int, group_size: int) -> int:
    """
    Counting bound on plan length: ceil(C(N, 2) / C(K, 2)).

    Each group covers at most C(K, 2) pairs, so no plan can be shorter.
    For N=49, K=5 this is ceil(1176 / 10) = 118.
    """
    if item_count < 2:
        return 0
    return math.ceil(math.comb(item_count, 2) / math.comb(group_size, 2))


def schonheim_bound(item_count: int, group_size: int) -> int:
    """Schönheim bound: ceil(N/K * ceil((N-1)/(K-1))), never below the counting bound."""
    if item_count < 2:
        return 0
    inner = math.ceil((item_count - 1) / (group_size - 1))
    return math.ceil(item_count * inner / group_size)


class CoveredPairSet:
    """
    Mutable set of covered pairs.

    Also keeps a per-item count of covered pairs, which the global greedy
    strategy uses as its tie-break.
    """

    def __init__(self):
        self._pairs: Set[Pair] = set()
        self._per_item: Dict[str, int] = {}

    def add(self, a: str, b: str) -> bool:
        """Mark (a, b) covered. Returns True if the pair was new."""
        if a == b:
            return False
        pair = make_pair(a, b)
        if pair in self._pairs:
            return False
        self._pairs.add(pair)
        self._per_item[a] = self._per_item.get(a, 0) + 1
        self._per_item[b] = self._per_item.get(b, 0) + 1
        return True

    def covers(self, a: str, b: str) -> bool:
        return make_pair(a, b) in self._pairs

    def count_for(self, item: str) -> int:
        """Number of covered pairs involving item."""
        return self._per_item.get(item, 0)

    def __contains__(self, pair: Pair) -> bool:
        return make_pair(*pair) in self._pairs

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[Pair]:
        return iter(self._pairs)
