"""
Tests for the weighted aggregation of reimbursements.

Tests cover:
- Survey-weighted headline statistics
- Unweighted spread statistics
- Income-bracket tables and code exclusion
- The weighted/unweighted asymmetry between headline and bracket means
"""

import pytest
import numpy as np
import pandas as pd
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from leave_model.distribution import (
    AggregateSummary,
    eligible_by_income,
    income_bracket_means,
    summarize,
    weighted_income_bracket_means,
    weighted_mean,
)
from leave_model.microsim import SimulationResult, run


DAILY_RATE = 1194 / 7


def _results(amounts, weights, income=None):
    n = len(amounts)
    return pd.DataFrame({
        "id": range(n),
        "reimbursement": amounts,
        "survey_weight": weights,
        "income_category": income if income is not None else [11] * n,
    })


class TestWeightedSummary:
    """Test population-level statistics."""

    def test_weighted_mean(self):
        summary = summarize(_results([100.0, 200.0], [2.0, 1.0]))
        assert summary.mean_reimbursement == pytest.approx((100 * 2 + 200 * 1) / 3)
        assert summary.mean_reimbursement == pytest.approx(133.3333, rel=1e-6)

    def test_total_eligible_is_weighted_count(self):
        summary = summarize(_results([0.0, 50.0, 75.0], [10.0, 20.0, 30.0]))
        assert summary.total_eligible == 50.0
        assert summary.n_eligible == 2
        assert summary.population == 60.0
        assert summary.eligible_share == pytest.approx(50 / 60)

    def test_total_cost(self):
        summary = summarize(_results([0.0, 50.0, 75.0], [10.0, 20.0, 30.0]))
        assert summary.total_cost == pytest.approx(50 * 20 + 75 * 30)

    def test_unweighted_spread(self):
        amounts = [0.0, 100.0, 300.0]
        summary = summarize(_results(amounts, [5.0, 1.0, 1.0]))
        assert summary.sd == pytest.approx(np.std(amounts, ddof=1))
        assert summary.min == 0.0
        assert summary.max == 300.0

    def test_single_record_sd_is_zero(self):
        assert summarize(_results([10.0], [1.0])).sd == 0.0

    def test_accepts_simulation_results(self):
        results = [
            SimulationResult(id=0, reimbursement=100.0, survey_weight=2.0, income_category=11),
            SimulationResult(id=1, reimbursement=200.0, survey_weight=1.0, income_category=12),
        ]
        summary = summarize(results, policy_name="manual")
        assert summary.policy_name == "manual"
        assert summary.mean_reimbursement == pytest.approx(400 / 3)

    def test_run_carries_policy_name(self, small_records, adjusted_policy):
        summary = summarize(run(small_records, adjusted_policy))
        assert isinstance(summary, AggregateSummary)
        assert summary.policy_name == "adjusted"

    def test_counterfactual_small_table(self, small_records, counterfactual_policy):
        summary = summarize(run(small_records, counterfactual_policy))

        # 140,000 weighted proportional days plus 2,500 weight at the cap
        expected_total = 140_000 * DAILY_RATE + 2_500 * 14328
        assert summary.total_cost == pytest.approx(expected_total)
        assert summary.mean_reimbursement == pytest.approx(expected_total / 7_900)
        assert summary.total_eligible == 6_900

    def test_sentinel_income_kept_in_totals(self, small_records, counterfactual_policy):
        """Income codes 97 and 10 still count toward population totals."""
        summary = summarize(run(small_records, counterfactual_policy))
        assert summary.n_records == len(small_records)
        assert summary.population == small_records["survey_weight"].sum()

    def test_empty_results_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            summarize(_results([], []))

    def test_zero_weight_rejected(self):
        with pytest.raises(ValueError, match="weight"):
            weighted_mean(np.array([1.0, 2.0]), np.array([0.0, 0.0]))


class TestIncomeBrackets:
    """Test income-stratified tables."""

    def test_excludes_rollup_and_sentinel_codes(self):
        results = _results(
            [10.0, 20.0, 30.0, 40.0, 50.0, 60.0],
            [1.0] * 6,
            income=[11, 10, 21, 96, 99, 55],
        )
        table = income_bracket_means(results)
        assert table["income_category"].tolist() == [11]

    def test_unweighted_bracket_means(self):
        results = _results([100.0, 200.0, 50.0], [2.0, 1.0, 4.0], income=[12, 12, 13])
        table = income_bracket_means(results).set_index("income_category")

        assert table.loc[12, "mean_reimbursement"] == pytest.approx(150.0)
        assert table.loc[12, "n_records"] == 2
        assert table.loc[13, "mean_reimbursement"] == pytest.approx(50.0)
        assert table.loc[12, "income_label"] == "$35,000 - $49,999"

    def test_weighted_bracket_means(self):
        results = _results([100.0, 200.0, 50.0], [2.0, 1.0, 4.0], income=[12, 12, 13])
        table = weighted_income_bracket_means(results).set_index("income_category")

        assert table.loc[12, "mean_reimbursement"] == pytest.approx(400 / 3)
        assert table.loc[12, "population"] == 3.0

    def test_bracket_means_differ_from_headline(self):
        """Bracket means are unweighted while the headline is weighted."""
        results = _results([100.0, 200.0], [2.0, 1.0], income=[12, 12])
        unweighted = income_bracket_means(results)["mean_reimbursement"].iloc[0]
        headline = summarize(results).mean_reimbursement

        assert unweighted == pytest.approx(150.0)
        assert headline == pytest.approx(133.3333, rel=1e-6)
        assert unweighted != pytest.approx(headline)

    def test_small_table_brackets(self, small_records, counterfactual_policy):
        table = income_bracket_means(run(small_records, counterfactual_policy))

        assert table["income_category"].tolist() == [11, 12, 13, 20, 22]
        np.testing.assert_allclose(
            table["mean_reimbursement"],
            [0.0, 10 * DAILY_RATE, 50 * DAILY_RATE, 14328.0, 14328.0],
        )

    def test_eligible_by_income(self):
        results = _results([0.0, 20.0, 30.0, 40.0], [1.0, 2.0, 3.0, 4.0], income=[11, 11, 13, 97])
        table = eligible_by_income(results).set_index("income_category")

        assert list(table.index) == [11, 13]
        assert table.loc[11, "n_eligible"] == 1
        assert table.loc[11, "weighted_eligible"] == 2.0
        assert table.loc[11, "eligible_share"] == pytest.approx(2 / 3)
        assert table.loc[13, "eligible_share"] == 1.0
