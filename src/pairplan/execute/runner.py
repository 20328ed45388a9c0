"""
Plan Execution: run each group of a plan through a comparison executor.

The executor is injected: any callable taking a group and returning its
PairResults. Transient failures are retried after a fixed delay; a group
that keeps failing aborts the run with ExecutionError.
"""

import logging
import time
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List, Sequence

logger = logging.getLogger(__name__)


class ExecutionError(Exception):
    """Raised when a group still fails after all retries."""
    pass


@dataclass
class PairResult:
    """One measured relationship: item vs. other, as seen from item."""

    item: str
    other: str
    item_score: float
    other_score: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairResult":
        return cls(
            item=data["item"],
            other=data["other"],
            item_score=float(data["item_score"]),
            other_score=float(data["other_score"]),
        )


GroupExecutor = Callable[[List[str]], List[PairResult]]


def results_from_matrix(
    group: Sequence[str],
    matrix: Sequence[Sequence[float]],
) -> List[PairResult]:
    """
    Turn a group's score matrix into directed pair results.

    Args:
        group: Items in query order
        matrix: matrix[i][k] is the score of group[k] measured at group[i]

    Returns:
        One PairResult per ordered pair (i, k) with i != k

    Raises:
        ValueError: If the matrix shape does not match the group
    """
    if len(matrix) != len(group) or any(len(row) != len(group) for row in matrix):
        raise ValueError(
            f"Score matrix shape does not match group of {len(group)} items"
        )

    results = []
    for i, item in enumerate(group):
        row = matrix[i]
        for k, other in enumerate(group):
            if k == i:
                continue
            results.append(
                PairResult(
                    item=item,
                    other=other,
                    item_score=float(row[i]),
                    other_score=float(row[k]),
                )
            )
    return results


def execute_group(
    group: Sequence[str],
    executor: GroupExecutor,
    retry_delay_seconds: float = 15.0,
    max_retries: int = 5,
    sleep: Callable[[float], None] = time.sleep,
) -> List[PairResult]:
    """
    Execute one group, retrying after a fixed delay on failure.

    Args:
        group: Items to compare together
        executor: Callable measuring a group
        retry_delay_seconds: Wait between attempts
        max_retries: Retries after the first attempt
        sleep: Delay function (injectable for tests)

    Returns:
        PairResults reported by the executor

    Raises:
        ExecutionError: If every attempt failed
    """
    attempt = 0
    while True:
        try:
            return executor(list(group))
        except Exception as e:
            if attempt >= max_retries:
                raise ExecutionError(
                    f"Group {list(group)} failed after {attempt + 1} attempts: {e}"
                ) from e
            attempt += 1
            logger.warning(
                f"Group request failed ({e}); retry {attempt}/{max_retries} "
                f"in {retry_delay_seconds}s"
            )
            sleep(retry_delay_seconds)


def evaluate_plan(
    plan: Sequence[Sequence[str]],
    executor: GroupExecutor,
    retry_delay_seconds: float = 15.0,
    max_retries: int = 5,
    sleep: Callable[[float], None] = time.sleep,
) -> List[PairResult]:
    """
    Execute every group of a plan in order.

    Args:
        plan: Validated plan
        executor: Callable measuring a group
        retry_delay_seconds: Wait between attempts
        max_retries: Retries per group
        sleep: Delay function (injectable for tests)

    Returns:
        Flattened PairResults of all groups, in plan order
    """
    logger.info(f"Evaluating plan: {len(plan)} groups")

    results: List[PairResult] = []
    for idx, group in enumerate(plan):
        logger.debug(f"Requesting group {idx + 1}/{len(plan)}: {list(group)}")
        results.extend(
            execute_group(
                group,
                executor,
                retry_delay_seconds=retry_delay_seconds,
                max_retries=max_retries,
                sleep=sleep,
            )
        )

    logger.info(f"✅ Plan evaluated: {len(results)} pair results")
    return results
