"""
Item Sources: the universe of items to be compared.

- Text file: one item per line, blank lines and "#" comments ignored
- Built-in default: the 50 US states (no territories, no DC)
"""

import logging
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)


class ItemsError(Exception):
    """Raised when an item source is missing or invalid."""
    pass


US_STATES = (
    "Alabama", "Alaska", "Arizona", "Arkansas", "California",
    "Colorado", "Connecticut", "Delaware", "Florida", "Georgia",
    "Hawaii", "Idaho", "Illinois", "Indiana", "Iowa",
    "Kansas", "Kentucky", "Louisiana", "Maine", "Maryland",
    "Massachusetts", "Michigan", "Minnesota", "Mississippi", "Missouri",
    "Montana", "Nebraska", "Nevada", "New Hampshire", "New Jersey",
    "New Mexico", "New York", "North Carolina", "North Dakota", "Ohio",
    "Oklahoma", "Oregon", "Pennsylvania", "Rhode Island", "South Carolina",
    "South Dakota", "Tennessee", "Texas", "Utah", "Vermont",
    "Virginia", "Washington", "West Virginia", "Wisconsin", "Wyoming",
)


def default_items() -> List[str]:
    """The built-in universe: 50 US states in alphabetical order."""
    return list(US_STATES)


def load_items(path: Union[str, Path]) -> List[str]:
    """
    Load an item universe from a text file.

    Args:
        path: File with one item per line

    Returns:
        Items in file order

    Raises:
        ItemsError: If the file is missing or lists an item twice
    """
    path = Path(path)
    if not path.exists():
        raise ItemsError(f"Items file not found: {path}")

    items = []
    seen = set()
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            item = line.strip()
            if not item or item.startswith("#"):
                continue
            if item in seen:
                raise ItemsError(f"Duplicate item {item!r} at {path}:{line_no}")
            seen.add(item)
            items.append(item)

    logger.info(f"Loaded {len(items)} items from {path}")
    return items
