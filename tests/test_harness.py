"""
Tests for the plan comparison harness and plan output.
"""

import json
import random
from unittest.mock import patch

import pytest
from pairplan.items import default_items
from pairplan.plan.harness import StrategyReport, build_plan, compare_strategies
from pairplan.plan.output import load_plan, write_plan
from pairplan.plan.pairs import build_pair_universe
from pairplan.plan.validator import IncompleteCoverage, validate_plan


@pytest.fixture
def items():
    return [f"item-{i:02d}" for i in range(20)]


class TestBuildPlan:
    """Test single-plan construction."""

    def test_returns_validated_plan(self, items):
        """Plan covers the universe."""
        plan = build_plan(items, 5, "naive", rng=random.Random(0))
        validate_plan(plan, build_pair_universe(items), 5)

    def test_unknown_strategy(self, items):
        """Unknown strategy name raises ValueError."""
        with pytest.raises(ValueError):
            build_plan(items, 5, "bogus")

    def test_validation_failure_propagates(self, items):
        """A broken strategy aborts plan acceptance."""
        with patch(
            "pairplan.plan.strategies.GlobalGreedyStrategy.build_plan",
            return_value=[items[:5]],
        ):
            with pytest.raises(IncompleteCoverage):
                build_plan(items, 5, "global_greedy")


class TestCompareStrategies:
    """Test the comparison driver."""

    def test_reports_all_strategies(self, items):
        """One report per strategy, naive first."""
        reports = compare_strategies(items, 5, rng=random.Random(1))
        assert [r.strategy for r in reports] == ["naive", "greedy_anchor", "global_greedy"]

    def test_report_fields(self, items):
        """Reports carry length, bound and coverage."""
        reports = compare_strategies(items, 5, rng=random.Random(1))
        for report in reports:
            assert report.lower_bound == 19
            assert report.plan_length >= report.lower_bound
            assert report.covered_pairs == 190
            assert report.groups_over_bound == report.plan_length - 19

    def test_subset_of_strategies(self, items):
        """Only the requested strategies run."""
        reports = compare_strategies(items, 4, strategies=["global_greedy"])
        assert len(reports) == 1
        assert reports[0].strategy == "global_greedy"

    def test_seeded_comparison_repeatable(self, items):
        """Same seed gives the same plan lengths."""
        first = compare_strategies(items, 5, rng=random.Random(9))
        second = compare_strategies(items, 5, rng=random.Random(9))
        assert [r.plan_length for r in first] == [r.plan_length for r in second]

    def test_report_to_dict(self):
        """Serialized report includes the derived gap."""
        report = StrategyReport("naive", 130, 118, 1176)
        assert report.to_dict() == {
            "strategy": "naive",
            "plan_length": 130,
            "lower_bound": 118,
            "covered_pairs": 1176,
            "groups_over_bound": 12,
        }

    @pytest.mark.integration
    def test_default_universe(self):
        """All strategies cover the 50 states above the bound of 123."""
        reports = compare_strategies(default_items(), 5, rng=random.Random(2024))
        for report in reports:
            assert report.covered_pairs == 1225
            assert report.plan_length >= 123


class TestPlanOutput:
    """Test JSON plan files."""

    def test_write_and_load(self, tmp_path, items):
        """Written plan reads back unchanged."""
        plan = build_plan(items, 5, "global_greedy")
        path = tmp_path / "plans" / "plan.json"

        assert write_plan(plan, path, "global_greedy", 5) is True
        assert load_plan(path) == plan

    def test_document_fields(self, tmp_path):
        """Metadata describes the plan."""
        plan = [["A", "B", "C"], ["A", "D"], ["B", "D"], ["C", "D"]]
        path = tmp_path / "plan.json"
        write_plan(plan, path, "naive", 3)

        with open(path) as f:
            document = json.load(f)
        assert document["strategy"] == "naive"
        assert document["group_size"] == 3
        assert document["item_count"] == 4
        assert document["plan_length"] == 4
        assert "generated_at" in document

    def test_write_failure(self, tmp_path):
        """Unwritable path returns False."""
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        assert write_plan([["A", "B"]], blocker / "plan.json", "naive", 5) is False
