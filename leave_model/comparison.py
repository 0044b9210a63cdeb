"""
Scenario Comparison

Side-by-side descriptive comparison of two or more reimbursement
scenarios: unweighted spread statistics per scenario alongside the
weighted headline figures, and a paired income-bracket table. No
statistical test is performed.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

import pandas as pd

from .codebook import INCOME_CODEBOOK, Codebook
from .distribution import (
    AggregateSummary,
    ResultsLike,
    results_frame,
    income_bracket_means,
    summarize,
)
from .microsim.engine import SimulationRun
from .policies import PolicyParameters

logger = logging.getLogger(__name__)

ScenarioLike = Union[SimulationRun, Tuple[PolicyParameters, ResultsLike]]


def _as_run(scenario: ScenarioLike) -> SimulationRun:
    if isinstance(scenario, SimulationRun):
        return scenario
    params, results = scenario
    table = results_frame(results)
    if "eligible" not in table.columns:
        table = table.assign(eligible=table["reimbursement"] > 0)
    return SimulationRun(params=params, table=table)


@dataclass
class ScenarioComparison:
    """
    Descriptive comparison across scenarios.

    Attributes:
        runs: Scenario runs in the order given
        summaries: AggregateSummary per scenario, keyed by name
        codebook: Income codebook used for the bracket table
    """
    runs: List[SimulationRun]
    summaries: Dict[str, AggregateSummary] = field(default_factory=dict)
    codebook: Codebook = INCOME_CODEBOOK

    @property
    def names(self) -> List[str]:
        return [r.name for r in self.runs]

    def describe_table(self) -> pd.DataFrame:
        """
        One row per scenario: unweighted mean/sd/min/max of reimbursement,
        plus the weighted mean and weighted eligible count.
        """
        rows = []
        for run in self.runs:
            s = self.summaries[run.name]
            rows.append({
                "Scenario": run.name,
                "Mean": float(run.table["reimbursement"].mean()),
                "SD": s.sd,
                "Min": s.min,
                "Max": s.max,
                "Weighted Mean": s.mean_reimbursement,
                "Weighted Eligible": s.total_eligible,
            })
        return pd.DataFrame(rows)

    def bracket_table(self) -> pd.DataFrame:
        """
        Unweighted mean reimbursement per income bracket, one column per
        scenario. With exactly two scenarios a ``Difference`` column holds
        second minus first.
        """
        table = None
        for run in self.runs:
            means = income_bracket_means(run, self.codebook)
            means = means[["income_category", "income_label", "mean_reimbursement"]].rename(
                columns={"mean_reimbursement": run.name}
            )
            if table is None:
                table = means
            else:
                table = table.merge(means, on=["income_category", "income_label"], how="outer")

        table = table.sort_values("income_category", ignore_index=True)
        if len(self.runs) == 2:
            first, second = self.names
            table.loc[:, "Difference"] = table[second] - table[first]
        return table

    def summary(self) -> str:
        """Generate text summary of the comparison."""
        lines = [
            f"Scenario Comparison: {' vs. '.join(self.names)}",
            "-" * 80,
        ]
        for name in self.names:
            s = self.summaries[name]
            lines.append(
                f"  {name:20s}: weighted mean ${s.mean_reimbursement:,.2f}, "
                f"{s.total_eligible:,.0f} eligible "
                f"({s.eligible_share*100:.1f}% of population)"
            )
        return "\n".join(lines)


def compare(
    scenario_a: ScenarioLike,
    scenario_b: ScenarioLike,
    *more: ScenarioLike,
    codebook: Codebook = INCOME_CODEBOOK,
) -> ScenarioComparison:
    """
    Compare scenario results.

    Args:
        scenario_a, scenario_b, *more: SimulationRun objects or
            (params, results) tuples, where results is a result table,
            a SimulationRun or a sequence of SimulationResult objects
        codebook: Income codebook for the bracket table

    Returns:
        ScenarioComparison

    Raises:
        ValueError: If two scenarios share a name
    """
    runs = [_as_run(s) for s in (scenario_a, scenario_b) + more]
    names = [r.name for r in runs]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"Scenario names must be unique, duplicated: {duplicates}")

    logger.info(f"Comparing scenarios: {', '.join(names)}")
    summaries = {run.name: summarize(run) for run in runs}
    return ScenarioComparison(runs=runs, summaries=summaries, codebook=codebook)


__all__ = [
    "ScenarioComparison",
    "compare",
]
