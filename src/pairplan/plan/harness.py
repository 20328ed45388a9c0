"""
Plan Comparison Harness: run strategies, validate, compare to the lower bound.

Every plan goes through validate_plan() before it is reported or returned;
a validation failure propagates and aborts the run.
"""

import logging
import random
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Sequence

from .pairs import Plan, build_pair_universe, pair_lower_bound
from .strategies import STRATEGIES, get_strategy
from .validator import validate_plan

logger = logging.getLogger(__name__)


@dataclass
class StrategyReport:
    """Outcome of one strategy run."""

    strategy: str
    plan_length: int
    lower_bound: int
    covered_pairs: int

    @property
    def groups_over_bound(self) -> int:
        return self.plan_length - self.lower_bound

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["groups_over_bound"] = self.groups_over_bound
        return data


def build_plan(
    items: Sequence[str],
    group_size: int = 5,
    strategy: str = "global_greedy",
    rng: Optional[random.Random] = None,
) -> Plan:
    """
    Build one plan with the named strategy and validate it.

    Args:
        items: Ordered item universe
        group_size: Maximum members per group (K)
        strategy: Strategy name (see STRATEGIES)
        rng: Source of shuffles (unseeded if None)

    Returns:
        Validated plan

    Raises:
        ValueError: Unknown strategy or duplicate items
        PlanValidationError: If the plan is not legal and complete
    """
    universe = build_pair_universe(items)
    planner = get_strategy(strategy, group_size=group_size, rng=rng)
    plan = planner.build_plan(items)
    validate_plan(plan, universe, group_size)

    logger.info(
        f"✅ Plan validated: {strategy}, {len(plan)} groups "
        f"(lower bound {pair_lower_bound(len(items), group_size)})"
    )
    return plan


def compare_strategies(
    items: Sequence[str],
    group_size: int = 5,
    rng: Optional[random.Random] = None,
    strategies: Optional[Sequence[str]] = None,
) -> List[StrategyReport]:
    """
    Run every strategy on the same universe and report plan lengths.

    Args:
        items: Ordered item universe
        group_size: Maximum members per group (K)
        rng: Shared source of shuffles, consumed in strategy order
        strategies: Names to run (default: all, naive first)

    Returns:
        One StrategyReport per strategy, in run order
    """
    universe = build_pair_universe(items)
    lower_bound = pair_lower_bound(len(items), group_size)
    rng = rng if rng is not None else random.Random()
    names = list(strategies) if strategies is not None else list(STRATEGIES)

    logger.info(
        f"Comparing {len(names)} strategies: {len(items)} items, "
        f"{len(universe)} pairs, K={group_size}, lower bound {lower_bound}"
    )

    reports = []
    for name in names:
        planner = get_strategy(name, group_size=group_size, rng=rng)
        plan = planner.build_plan(items)
        covered = validate_plan(plan, universe, group_size)

        report = StrategyReport(
            strategy=name,
            plan_length=len(plan),
            lower_bound=lower_bound,
            covered_pairs=covered,
        )
        reports.append(report)
        logger.info(
            f"  {name:<14} {report.plan_length:5d} groups "
            f"(+{report.groups_over_bound} over bound)"
        )

    return reports
