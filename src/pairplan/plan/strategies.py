"""
Plan Strategies: Heuristics for building covering plans.

- NaivePlanStrategy: anchor sweep, fresh random inner order per anchor
- GreedyAnchorStrategy: anchor sweep, pair-aware candidate filtering
- GlobalGreedyStrategy: no anchor, best next item by (new pairs, used pairs)

None of them guarantees a minimum plan length; all of them guarantee full
coverage with groups of at most K members.
"""

import logging
import random
from typing import Dict, List, Optional, Sequence, Type

from .pairs import CoveredPairSet, Group, Plan

logger = logging.getLogger(__name__)


class PlanStrategy:
    """
    Base class: owns the plan under construction.

    State (plan, covered pairs, in-progress group) lives on the instance and
    is reset at the start of every build_plan() call.
    """

    name = "base"

    def __init__(self, group_size: int = 5, rng: Optional[random.Random] = None):
        """
        Args:
            group_size: Maximum members per group (K), at least 2
            rng: Source of shuffles; seed it for reproducible plans
        """
        if group_size < 2:
            raise ValueError(f"group_size must be at least 2, got {group_size}")
        self.group_size = group_size
        self.rng = rng if rng is not None else random.Random()
        self._reset()

    def _reset(self) -> None:
        self.plan: Plan = []
        self.covered = CoveredPairSet()
        self.current_group: Group = []

    def _begin(self, items: Sequence[str]) -> None:
        """Reset construction state for a new item universe."""
        if len(set(items)) != len(items):
            raise ValueError("Item universe contains duplicate items")
        self._reset()

    def _shuffled(self, items: Sequence[str]) -> List[str]:
        """Fresh random permutation of items."""
        return self.rng.sample(list(items), len(items))

    def _push(self, item: str) -> bool:
        """
        Add item to the current group (no duplicates) and mark its pairs
        with every existing member as covered.

        Returns:
            True if the item was added, False if it was already a member
        """
        if item in self.current_group:
            return False
        for member in self.current_group:
            self.covered.add(item, member)
        self.current_group.append(item)
        return True

    def _finish_group(self) -> None:
        """Close the current group and append it to the plan."""
        if self.current_group:
            logger.debug(f"Group {len(self.plan)} closed: {self.current_group}")
            self.plan.append(self.current_group)
            self.current_group = []

    @property
    def _carry_limit(self) -> int:
        # Groups this small stay open across anchors; larger ones are flushed.
        return self.group_size - 2

    def build_plan(self, items: Sequence[str]) -> Plan:
        """
        Build a covering plan for items.

        Args:
            items: Ordered item universe (distinct names)

        Returns:
            List of groups covering every pair of items
        """
        raise NotImplementedError


class NaivePlanStrategy(PlanStrategy):
    """
    Baseline: sweep each item once as anchor.

    For every anchor the inner order is reshuffled, which gives shorter
    plans than shuffling once up front. Anchor order is kept as given.
    """

    name = "naive"

    def build_plan(self, items: Sequence[str]) -> Plan:
        self._begin(items)

        for anchor in items:
            for other in self._shuffled(items):
                if other == anchor or self.covered.covers(anchor, other):
                    continue
                self._push(anchor)
                self._push(other)
                if len(self.current_group) == self.group_size:
                    self._finish_group()

            if len(self.current_group) > self._carry_limit:
                self._finish_group()

        self._finish_group()

        logger.info(f"Naive plan built: {len(self.plan)} groups for {len(items)} items")
        return self.plan


class GreedyAnchorStrategy(PlanStrategy):
    """
    Anchor sweep with pair-aware candidates.

    A candidate joins the group only if it has no covered pair with any of
    the recently added members. The in-progress group persists across
    anchors, so a short group left by one anchor is resumed by the next.
    """

    name = "greedy_anchor"

    def _reset(self) -> None:
        super()._reset()
        self.recent_members: List[str] = []

    def _push(self, item: str) -> bool:
        added = super()._push(item)
        if item not in self.recent_members:
            self.recent_members.append(item)
        return added

    def _finish_group(self) -> None:
        super()._finish_group()
        self.recent_members = []

    def _has_uncovered_pair(self, anchor: str, items: Sequence[str]) -> bool:
        return any(
            other != anchor and not self.covered.covers(anchor, other)
            for other in items
        )

    def _find_candidate(self, anchor: str, items: Sequence[str]) -> Optional[str]:
        """First item of a fresh shuffle with no covered pair against recent members."""
        for candidate in self._shuffled(items):
            if candidate == anchor:
                continue
            if any(self.covered.covers(candidate, member) for member in self.recent_members):
                continue
            return candidate
        return None

    def build_plan(self, items: Sequence[str]) -> Plan:
        self._begin(items)

        for anchor in items:
            while self._has_uncovered_pair(anchor, items):
                self._push(anchor)
                candidate = self._find_candidate(anchor, items)

                if candidate is not None:
                    self._push(candidate)
                    if len(self.current_group) == self.group_size:
                        self._finish_group()
                else:
                    # Narrow the exclusion basis; the next search always succeeds
                    logger.debug(f"No clean candidate for {anchor}; resetting recent members")
                    self.recent_members = [anchor]

            if len(self.current_group) > self._carry_limit:
                self._finish_group()

        self._finish_group()

        logger.info(f"Greedy anchor plan built: {len(self.plan)} groups for {len(items)} items")
        return self.plan


class GlobalGreedyStrategy(PlanStrategy):
    """
    Global greedy: no anchor.

    Each step adds the item contributing the most new pairs to the current
    group, preferring the least used item on ties. With an empty group that
    rule picks the item with the most remaining potential, which becomes the
    group's first member.
    """

    name = "global_greedy"

    def _score(self, item: str) -> tuple:
        new_pairs = sum(
            1 for member in self.current_group if not self.covered.covers(item, member)
        )
        existing_pairs = self.covered.count_for(item)
        return (-new_pairs, existing_pairs)

    def build_plan(self, items: Sequence[str]) -> Plan:
        self._begin(items)
        total_pairs = len(items) * (len(items) - 1) // 2

        while len(self.covered) < total_pairs:
            candidates = [item for item in items if item not in self.current_group]
            # min() keeps the first of equal scores, so ties fall back to item order
            chosen = min(candidates, key=self._score)
            self._push(chosen)
            if len(self.current_group) == self.group_size:
                self._finish_group()

        self._finish_group()

        logger.info(f"Global greedy plan built: {len(self.plan)} groups for {len(items)} items")
        return self.plan


STRATEGIES: Dict[str, Type[PlanStrategy]] = {
    NaivePlanStrategy.name: NaivePlanStrategy,
    GreedyAnchorStrategy.name: GreedyAnchorStrategy,
    GlobalGreedyStrategy.name: GlobalGreedyStrategy,
}


def get_strategy(
    name: str,
    group_size: int = 5,
    rng: Optional[random.Random] = None,
) -> PlanStrategy:
    """
    Instantiate a strategy by name.

    Args:
        name: "naive", "greedy_anchor" or "global_greedy"
        group_size: Maximum members per group (K)
        rng: Source of shuffles (unseeded if None)

    Raises:
        ValueError: If the name is unknown
    """
    try:
        strategy_cls = STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown strategy: {name!r} (choose from {', '.join(STRATEGIES)})"
        ) from None
    return strategy_cls(group_size=group_size, rng=rng)
