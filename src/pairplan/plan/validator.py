"""
Plan Validator: prove a candidate plan is legal and complete.

A plan is accepted only if:
- every group has between 1 and K members
- every pair inside a group belongs to the pair universe
- the distinct pairs covered equal the whole universe

Pairs covered more than once are fine; they are counted once.
"""

import logging
from typing import AbstractSet, Sequence

from .pairs import Pair, group_pairs

logger = logging.getLogger(__name__)


class PlanValidationError(Exception):
    """Raised when a plan fails validation."""
    pass


class InvalidGroupSize(PlanValidationError):
    """A group is empty or has more than K members."""

    def __init__(self, group_index: int, group: Sequence[str], group_size: int):
        self.group_index = group_index
        self.group = list(group)
        self.group_size = group_size
        super().__init__(
            f"Group {group_index} has {len(group)} members (allowed: 1..{group_size})"
        )


class UnknownPair(PlanValidationError):
    """A group forms a pair outside the universe (self pair or foreign item)."""

    def __init__(self, group_index: int, pair: Pair):
        self.group_index = group_index
        self.pair = pair
        super().__init__(f"Group {group_index} contains invalid pair: {pair[0]}, {pair[1]}")


class IncompleteCoverage(PlanValidationError):
    """The plan covers fewer distinct pairs than the universe holds."""

    def __init__(self, covered: int, expected: int):
        self.covered = covered
        self.expected = expected
        super().__init__(f"Plan covers {covered} of {expected} pairs")


def validate_plan(
    plan: Sequence[Sequence[str]],
    universe: AbstractSet[Pair],
    group_size: int = 5,
) -> int:
    """
    Validate a plan against the pair universe.

    Args:
        plan: Ordered list of groups
        universe: Complete set of canonical pairs
        group_size: Maximum members per group (K)

    Returns:
        Number of distinct pairs covered (equal to len(universe))

    Raises:
        InvalidGroupSize: If a group is empty or larger than group_size
        UnknownPair: If a group contains a pair not in the universe
        IncompleteCoverage: If some pair of the universe is never covered
    """
    covered = set()

    for idx, group in enumerate(plan):
        if not 1 <= len(group) <= group_size:
            raise InvalidGroupSize(idx, group, group_size)

        for pair in group_pairs(group):
            if pair not in universe:
                raise UnknownPair(idx, pair)
            covered.add(pair)

    if len(covered) != len(universe):
        raise IncompleteCoverage(len(covered), len(universe))

    logger.debug(f"Plan valid: {len(plan)} groups cover {len(covered)} pairs")
    return len(covered)
