"""
Result Reporting: rank pairwise results by differential score.

The same pair can appear several times (it was covered by more than one
group); each occurrence is ranked on its own since the other group members
shift the measured scores.
"""

import logging
from typing import Any, Dict, List, Sequence

from .execute.runner import PairResult

logger = logging.getLogger(__name__)


def rank_pairs(results: Sequence[PairResult]) -> List[Dict[str, Any]]:
    """
    Rank results by diff = other_score - item_score (descending).

    Args:
        results: Flattened pair results

    Returns:
        List of result dicts with a "diff" key, best first; equal diffs keep
        their input order
    """
    rows = []
    for result in results:
        row = {"diff": result.other_score - result.item_score}
        row.update(result.to_dict())
        rows.append(row)

    ranked = sorted(rows, key=lambda r: r["diff"], reverse=True)
    logger.debug(f"Ranked {len(ranked)} pair results")
    return ranked


def top_pairs(results: Sequence[PairResult], n: int = 10) -> List[Dict[str, Any]]:
    """First n results of rank_pairs()."""
    return rank_pairs(results)[:n]


def format_pairs(rows: Sequence[Dict[str, Any]]) -> List[str]:
    """Printable numbered lines for ranked rows."""
    lines = []
    for i, row in enumerate(rows, 1):
        lines.append(
            f"{i:3d}. {row['item']:<20} -> {row['other']:<20} "
            f"diff {row['diff']:+8.2f} ({row['item_score']:.2f} vs {row['other_score']:.2f})"
        )
    return lines
