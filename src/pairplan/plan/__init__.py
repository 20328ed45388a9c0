"""
Plan Generation Module: Build and verify covering plans.

- Pair universe and covered-pair bookkeeping
- Three construction heuristics (naive, greedy anchor, global greedy)
- Strict validation: group size, pair legality, full coverage
- Output: ordered list of groups, optionally written as JSON
"""

__all__ = ["pairs", "validator", "strategies", "harness", "output"]
