"""
Result Cache: pairwise results persisted as JSON.

Keyed by existence only: if the file exists it is loaded and reused,
otherwise results are computed and written.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Union

from .runner import PairResult

logger = logging.getLogger(__name__)


class CacheError(Exception):
    """Raised when a cached result file cannot be read."""
    pass


def load_results(path: Union[str, Path]) -> List[PairResult]:
    """
    Load cached pair results.

    Raises:
        CacheError: If the file is unreadable or malformed
    """
    path = Path(path)
    try:
        with open(path, "r") as f:
            document = json.load(f)
        return [PairResult.from_dict(entry) for entry in document["results"]]
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise CacheError(f"Failed to load results from {path}: {e}")


def write_results(results: List[PairResult], path: Union[str, Path]) -> bool:
    """
    Write pair results as JSON.

    Returns:
        True if successful, False otherwise
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        document = {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "result_count": len(results),
            "results": [r.to_dict() for r in results],
        }
        with open(path, "w") as f:
            json.dump(document, f, indent=2)
        logger.info(f"Wrote {len(results)} results: {path}")
        return True
    except OSError as e:
        logger.error(f"Failed to write results: {e}")
        return False


def load_or_evaluate(
    path: Union[str, Path],
    compute: Callable[[], List[PairResult]],
) -> List[PairResult]:
    """
    Reuse cached results if present, else compute and persist them.

    Args:
        path: Cache file path
        compute: Produces results on a cache miss (e.g. evaluate_plan)

    Returns:
        Cached or freshly computed results
    """
    path = Path(path)
    if path.exists():
        logger.info(f"Found cached results {path}, reading...")
        return load_results(path)

    logger.info(f"No cached results at {path}; computing...")
    results = compute()
    if not write_results(results, path):
        logger.warning("Results computed but not cached")
    return results
