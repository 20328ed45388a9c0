"""
Execution Module: Run plans against a comparison service.

- Injected group executor, fixed-delay retry
- JSON result cache (reuse if present, else compute and write)
"""

__all__ = ["runner", "cache"]
