"""
Distributional Analysis Module

Turns per-respondent reimbursements into population estimates using the
survey weights, and breaks them down by family-income bracket.

Key features:
- Survey-weighted mean reimbursement and weighted eligible count
- Weighted total program cost and represented population
- Unweighted spread statistics (sd/min/max) for cross-scenario comparison
- Income-bracket tables, unweighted (illustrative) and weighted

The headline estimate is survey-weighted while the illustrative income
breakdown uses unweighted group means. Both are kept as separately named
operations.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Union

import numpy as np
import pandas as pd

from .codebook import INCOME_CODEBOOK, Codebook
from .microsim.engine import SimulationResult, SimulationRun

logger = logging.getLogger(__name__)

ResultsLike = Union[SimulationRun, pd.DataFrame, Iterable[SimulationResult]]


def results_frame(results: ResultsLike) -> pd.DataFrame:
    """Normalize a SimulationRun, result table or SimulationResult sequence to a table."""
    if isinstance(results, SimulationRun):
        df = results.table
    elif isinstance(results, pd.DataFrame):
        df = results
    else:
        df = pd.DataFrame(
            [(r.id, r.reimbursement, r.survey_weight, r.income_category) for r in results],
            columns=["id", "reimbursement", "survey_weight", "income_category"],
        )

    if df.empty:
        raise ValueError("Cannot summarize an empty result set")
    return df


def _policy_name(results: ResultsLike, default: str) -> str:
    if isinstance(results, SimulationRun):
        return results.name
    return default


@dataclass(frozen=True)
class AggregateSummary:
    """
    Population-level statistics for one scenario.

    Attributes:
        policy_name: Scenario label
        mean_reimbursement: Survey-weighted mean reimbursement (dollars)
        total_eligible: Weighted count of respondents with reimbursement > 0
        total_cost: Weighted sum of reimbursements (dollars)
        population: Sum of survey weights
        n_records: Number of respondents
        n_eligible: Unweighted count of respondents with reimbursement > 0
        sd: Unweighted standard deviation of reimbursement
        min: Unweighted minimum reimbursement
        max: Unweighted maximum reimbursement
    """
    policy_name: str
    mean_reimbursement: float
    total_eligible: float
    total_cost: float
    population: float
    n_records: int
    n_eligible: int
    sd: float
    min: float
    max: float

    @property
    def eligible_share(self) -> float:
        """Weighted share of the population receiving reimbursement (0-1)."""
        if self.population == 0:
            return 0.0
        return self.total_eligible / self.population

    def to_dict(self) -> Dict:
        return {
            "policy": self.policy_name,
            "mean_reimbursement": self.mean_reimbursement,
            "total_eligible": self.total_eligible,
            "total_cost": self.total_cost,
            "population": self.population,
            "n_records": self.n_records,
            "n_eligible": self.n_eligible,
            "sd": self.sd,
            "min": self.min,
            "max": self.max,
        }


# =============================================================================
# POPULATION SUMMARY
# =============================================================================

def weighted_mean(values: np.ndarray, weights: np.ndarray) -> float:
    total_weight = float(np.sum(weights))
    if total_weight <= 0:
        raise ValueError("Total survey weight must be positive")
    return float(np.sum(values * weights) / total_weight)


def summarize(results: ResultsLike, policy_name: str = "scenario") -> AggregateSummary:
    """
    Summarize a scenario's results for the whole population.

    Sentinel income codes are kept here; they only drop out of the
    income-bracket tables.

    Args:
        results: SimulationRun, result table, or SimulationResult objects
        policy_name: Label used when ``results`` does not carry one

    Returns:
        AggregateSummary with weighted headline figures and unweighted spread
    """
    df = results_frame(results)
    amount = df["reimbursement"].to_numpy(dtype=float)
    weight = df["survey_weight"].to_numpy(dtype=float)
    received = amount > 0

    summary = AggregateSummary(
        policy_name=_policy_name(results, policy_name),
        mean_reimbursement=weighted_mean(amount, weight),
        total_eligible=float(np.sum(weight * received)),
        total_cost=float(np.sum(amount * weight)),
        population=float(np.sum(weight)),
        n_records=len(df),
        n_eligible=int(received.sum()),
        sd=float(np.std(amount, ddof=1)) if len(df) > 1 else 0.0,
        min=float(amount.min()),
        max=float(amount.max()),
    )
    logger.debug(f"Summarized {summary.policy_name}: {summary.to_dict()}")
    return summary


# =============================================================================
# INCOME BRACKET TABLES
# =============================================================================

def _bracket_rows(df: pd.DataFrame, codebook: Codebook) -> pd.DataFrame:
    keep = df["income_category"].map(codebook.is_bracket).astype(bool)
    dropped = int((~keep).sum())
    if dropped:
        logger.debug(f"Excluded {dropped:,} records with non-bracket {codebook.name} codes")
    return df.loc[keep]


def _with_labels(table: pd.DataFrame, codebook: Codebook) -> pd.DataFrame:
    table.insert(1, "income_label", table["income_category"].map(codebook.label))
    return table


def income_bracket_means(
    results: ResultsLike,
    codebook: Codebook = INCOME_CODEBOOK,
) -> pd.DataFrame:
    """
    Unweighted mean reimbursement per income bracket.

    Roll-up, sentinel and unrecognized income codes are excluded.

    Returns:
        DataFrame with income_category, income_label, n_records,
        mean_reimbursement, sorted by income code
    """
    df = _bracket_rows(results_frame(results), codebook)
    table = (
        df.groupby("income_category", as_index=False)
        .agg(
            n_records=("reimbursement", "size"),
            mean_reimbursement=("reimbursement", "mean"),
        )
        .sort_values("income_category", ignore_index=True)
    )
    return _with_labels(table, codebook)


def weighted_income_bracket_means(
    results: ResultsLike,
    codebook: Codebook = INCOME_CODEBOOK,
) -> pd.DataFrame:
    """
    Survey-weighted mean reimbursement per income bracket.

    Returns:
        DataFrame with income_category, income_label, population,
        mean_reimbursement, sorted by income code
    """
    df = _bracket_rows(results_frame(results), codebook)
    weighted = df.assign(weighted_amount=df["reimbursement"] * df["survey_weight"])
    table = (
        weighted.groupby("income_category", as_index=False)
        .agg(
            population=("survey_weight", "sum"),
            total_weighted=("weighted_amount", "sum"),
        )
        .sort_values("income_category", ignore_index=True)
    )
    table.loc[:, "mean_reimbursement"] = table["total_weighted"] / table["population"]
    table = table[["income_category", "population", "mean_reimbursement"]].copy()
    return _with_labels(table, codebook)


def eligible_by_income(
    results: ResultsLike,
    codebook: Codebook = INCOME_CODEBOOK,
) -> pd.DataFrame:
    """
    Eligible counts per income bracket, weighted and unweighted.

    Returns:
        DataFrame with income_category, income_label, n_eligible,
        weighted_eligible, eligible_share (weighted, 0-1)
    """
    df = _bracket_rows(results_frame(results), codebook)
    received = df["reimbursement"] > 0
    flagged = df.assign(
        received=received.astype(int),
        weighted_received=received * df["survey_weight"],
    )
    table = (
        flagged.groupby("income_category", as_index=False)
        .agg(
            n_eligible=("received", "sum"),
            weighted_eligible=("weighted_received", "sum"),
            population=("survey_weight", "sum"),
        )
        .sort_values("income_category", ignore_index=True)
    )
    table.loc[:, "eligible_share"] = table["weighted_eligible"] / table["population"]
    table = table[["income_category", "n_eligible", "weighted_eligible", "eligible_share"]].copy()
    return _with_labels(table, codebook)


__all__ = [
    "AggregateSummary",
    "weighted_mean",
    "results_frame",
    "summarize",
    "income_bracket_means",
    "weighted_income_bracket_means",
    "eligible_by_income",
]
