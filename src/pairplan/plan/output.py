"""
Plan Output: write and read plans as JSON.

Format:
    {
      "strategy": "global_greedy",
      "group_size": 5,
      "item_count": 50,
      "plan_length": 133,
      "generated_at": "...",
      "groups": [["Alabama", "Alaska", ...], ...]
    }
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence, Union

from .pairs import Plan

logger = logging.getLogger(__name__)


def write_plan(
    plan: Plan,
    output_path: Union[str, Path],
    strategy: str,
    group_size: int,
) -> bool:
    """
    Write a plan as indented JSON.

    Args:
        plan: Validated plan
        output_path: Output JSON file path (parent dirs are created)
        strategy: Name of the strategy that built the plan
        group_size: Maximum members per group (K)

    Returns:
        True if successful, False otherwise
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        items = {item for group in plan for item in group}
        document = {
            "strategy": strategy,
            "group_size": group_size,
            "item_count": len(items),
            "plan_length": len(plan),
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "groups": [list(group) for group in plan],
        }
        with open(output_path, "w") as f:
            json.dump(document, f, indent=2)
        logger.info(f"Wrote plan: {output_path}")
        return True
    except OSError as e:
        logger.error(f"Failed to write plan: {e}")
        return False


def load_plan(path: Union[str, Path]) -> Plan:
    """Read the groups of a plan written by write_plan()."""
    with open(path, "r") as f:
        document = json.load(f)
    groups: Sequence[Sequence[str]] = document.get("groups", [])
    return [list(group) for group in groups]
