"""
Command-line interface.

    pairplan plan      Build and validate one plan, optionally write it as JSON
    pairplan compare   Run all strategies and compare plan lengths
    pairplan evaluate  Execute a plan file (or reuse cached results), print top pairs
    pairplan report    Print the top pairs of a cached results file

Settings come from the TOML config; command-line flags override them and are
held to the same bounds.
"""

import argparse
import importlib
import logging
import random
import sys
from typing import Any, List, Optional

from .config import Config, ConfigError
from .items import default_items, load_items
from .plan.harness import build_plan, compare_strategies
from .plan.output import write_plan
from .plan.pairs import pair_lower_bound, schonheim_bound
from .plan.strategies import STRATEGIES

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pairplan",
        description="Plan groups of at most K items so that every pair is compared.",
    )
    parser.add_argument("--config", default=None, help="Path to pairplan.toml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_plan_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--items-file", default=None, help="One item per line")
        p.add_argument("--group-size", type=int, default=None, help="Max items per group (K)")
        p.add_argument("--seed", type=int, default=None, help="Seed for reproducible plans")

    plan_p = sub.add_parser("plan", help="Build and validate one plan")
    add_plan_args(plan_p)
    plan_p.add_argument("--strategy", choices=list(STRATEGIES), default=None)
    plan_p.add_argument("--output", default=None, help="Write the plan as JSON")

    compare_p = sub.add_parser("compare", help="Compare all strategies")
    add_plan_args(compare_p)

    evaluate_p = sub.add_parser("evaluate", help="Execute a plan file with an executor")
    evaluate_p.add_argument("plan_file", help="Plan JSON written by `pairplan plan`")
    evaluate_p.add_argument(
        "--executor",
        required=True,
        help="Group executor as module:function (called with a list of items)",
    )
    evaluate_p.add_argument("--results", default=None, help="Results cache JSON")
    evaluate_p.add_argument("--top", type=int, default=None, help="Number of pairs to show")

    report_p = sub.add_parser("report", help="Top pairs from cached results")
    report_p.add_argument("--results", default=None, help="Cached results JSON")
    report_p.add_argument("--top", type=int, default=None, help="Number of pairs to show")

    return parser


def _setting(value: Any, config: Config, section: str, param: str) -> Any:
    """
    Command-line value if given, else the config value.

    Raises:
        ConfigError: If the command-line value is outside the config bounds
    """
    if value is None:
        return config.get(section, param)

    bounds = Config.PARAM_BOUNDS.get(section, {}).get(param)
    if isinstance(bounds, tuple) and len(bounds) == 2:
        min_val, max_val = bounds
        if not (min_val <= value <= max_val):
            raise ConfigError(
                f"Parameter {section}.{param}={value} out of bounds [{min_val}, {max_val}]"
            )
    return value


def _resolve_items(args: argparse.Namespace, config: Config) -> List[str]:
    source = args.items_file or config.get("items", "source_path")
    if source:
        return load_items(source)
    return default_items()


def _resolve_rng(args: argparse.Namespace, config: Config) -> random.Random:
    seed = args.seed if args.seed is not None else config.get("plan", "seed")
    return random.Random(seed)


def _load_executor(target: str):
    """Import a group executor given as "module:function"."""
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Executor must be given as module:function, got {target!r}")
    executor = getattr(importlib.import_module(module_name), attr)
    if not callable(executor):
        raise ValueError(f"Executor {target!r} is not callable")
    return executor


def _print_top(results, top_n: int) -> None:
    from .report import format_pairs, top_pairs

    for line in format_pairs(top_pairs(results, top_n)):
        print(line)


def _run_plan(args: argparse.Namespace, config: Config) -> int:
    group_size = _setting(args.group_size, config, "plan", "group_size")
    strategy = args.strategy or config.get("plan", "strategy")
    items = _resolve_items(args, config)

    plan = build_plan(items, group_size, strategy, rng=_resolve_rng(args, config))

    print(f"Strategy:     {strategy}")
    print(f"Items:        {len(items)}")
    print(f"Plan length:  {len(plan)}")
    print(f"Lower bound:  {pair_lower_bound(len(items), group_size)}")

    if args.output and not write_plan(plan, args.output, strategy, group_size):
        return 1
    return 0


def _run_compare(args: argparse.Namespace, config: Config) -> int:
    group_size = _setting(args.group_size, config, "plan", "group_size")
    items = _resolve_items(args, config)

    reports = compare_strategies(items, group_size, rng=_resolve_rng(args, config))

    print(f"Total number of pairs: {len(items) * (len(items) - 1) // 2}")
    print(f"Lower bound: {pair_lower_bound(len(items), group_size)} "
          f"(Schönheim: {schonheim_bound(len(items), group_size)})")
    for report in reports:
        print(f"{report.strategy:<14} plan length: {report.plan_length}")
    return 0


def _run_evaluate(args: argparse.Namespace, config: Config) -> int:
    from .execute.cache import load_or_evaluate
    from .execute.runner import evaluate_plan
    from .plan.output import load_plan

    top_n = _setting(args.top, config, "report", "top_n")
    path = args.results or config.get("cache", "results_path")
    plan = load_plan(args.plan_file)
    executor = _load_executor(args.executor)

    results = load_or_evaluate(
        path,
        lambda: evaluate_plan(
            plan,
            executor,
            retry_delay_seconds=config.get("execute", "retry_delay_seconds"),
            max_retries=config.get("execute", "max_retries"),
        ),
    )
    _print_top(results, top_n)
    return 0


def _run_report(args: argparse.Namespace, config: Config) -> int:
    from .execute.cache import load_results

    top_n = _setting(args.top, config, "report", "top_n")
    path = args.results or config.get("cache", "results_path")

    _print_top(load_results(path), top_n)
    return 0


COMMANDS = {
    "plan": _run_plan,
    "compare": _run_compare,
    "evaluate": _run_evaluate,
    "report": _run_report,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entrypoint."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    )

    try:
        config = Config.load(args.config)
        logger.info(f"Config loaded: {config}")
        return COMMANDS[args.command](args, config)

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"{args.command} failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
