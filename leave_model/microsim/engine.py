import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

import numpy as np
import pandas as pd

from ..codebook import POVERTY_CODEBOOK, Codebook
from ..policies import PolicyParameters
from ..records import (
    IndividualRecord,
    RecordSchemaError,
    records_to_frame,
    validate_record_table,
)

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["id", "eligible", "reimbursement", "survey_weight", "income_category"]


# =============================================================================
# SCALAR EVALUATORS
# =============================================================================

def _poverty_admissible(code, params: PolicyParameters, codebook: Codebook) -> bool:
    if code in params.admissible_poverty_codes:
        return True
    return codebook.is_recognized(code) and code < params.poverty_ceiling


def is_eligible(
    record: IndividualRecord,
    params: PolicyParameters,
    codebook: Codebook = POVERTY_CODEBOOK,
) -> bool:
    """
    Whether a respondent qualifies for reimbursement under ``params``.

    Work-loss days must strictly exceed ``min_eligible_days``. When the
    policy has an income test, the poverty-ratio code must also be below
    the ceiling or be one of the admissible carve-out codes. Codes missing
    from the codebook never pass the income test.
    """
    if not record.work_loss_days > params.min_eligible_days:
        return False
    if params.has_income_test:
        return _poverty_admissible(record.poverty_ratio, params, codebook)
    return True


def reimbursement(
    record: IndividualRecord,
    params: PolicyParameters,
    codebook: Codebook = POVERTY_CODEBOOK,
) -> float:
    """
    Reimbursement for one respondent; 0 when ineligible.

    Proportional at or below the day threshold (inclusive), flat cap above.
    """
    if not is_eligible(record, params, codebook):
        return 0.0

    days = record.work_loss_days
    if days <= params.day_threshold_for_cap:
        return max(0.0, (days - params.offset_days) * params.daily_rate)
    return float(params.max_benefit)


# =============================================================================
# VECTORIZED EVALUATORS
# =============================================================================

def eligibility_mask(
    df: pd.DataFrame,
    params: PolicyParameters,
    codebook: Codebook = POVERTY_CODEBOOK,
) -> np.ndarray:
    """Vectorized ``is_eligible`` over a record table."""
    days = df["work_loss_days"].to_numpy()
    eligible = days > params.min_eligible_days

    if params.has_income_test:
        poverty = df["poverty_ratio"]
        recognized = poverty.isin(list(codebook.labels)).to_numpy()
        below_ceiling = recognized & (poverty.to_numpy() < params.poverty_ceiling)
        carve_out = poverty.isin(list(params.admissible_poverty_codes)).to_numpy()
        eligible = eligible & (below_ceiling | carve_out)

    return eligible


def reimbursement_amounts(
    df: pd.DataFrame,
    params: PolicyParameters,
    codebook: Codebook = POVERTY_CODEBOOK,
) -> np.ndarray:
    """Vectorized ``reimbursement`` over a record table."""
    days = df["work_loss_days"].to_numpy(dtype=float)
    eligible = eligibility_mask(df, params, codebook)

    proportional = np.maximum(0.0, (days - params.offset_days) * params.daily_rate)
    amount = np.where(days <= params.day_threshold_for_cap, proportional, float(params.max_benefit))
    return np.where(eligible, amount, 0.0)


# =============================================================================
# SIMULATION RUNNER
# =============================================================================

@dataclass(frozen=True)
class SimulationResult:
    """Reimbursement for one (record, policy) pair."""
    id: int
    reimbursement: float
    survey_weight: float
    income_category: int


@dataclass(frozen=True, eq=False)
class SimulationRun:
    """
    Output of one scenario run.

    Attributes:
        params: Policy parameters the run used
        table: Per-record results in input order, columns RESULT_COLUMNS
    """
    params: PolicyParameters
    table: pd.DataFrame

    @property
    def name(self) -> str:
        return self.params.name

    def __len__(self) -> int:
        return len(self.table)

    def to_results(self) -> List[SimulationResult]:
        return [
            SimulationResult(
                id=int(row.id),
                reimbursement=float(row.reimbursement),
                survey_weight=float(row.survey_weight),
                income_category=int(row.income_category),
            )
            for row in self.table.itertuples(index=False)
        ]


Records = Union[pd.DataFrame, Sequence[IndividualRecord], Iterable[dict]]


class ReimbursementCalculator:
    """
    Vectorized reimbursement calculator over individual survey records.

    Each record is evaluated independently, so the table can be split into
    contiguous partitions and recombined in order.
    """

    def __init__(self, params: PolicyParameters, codebook: Codebook = POVERTY_CODEBOOK):
        self.params = params
        self.codebook = codebook

    def calculate(self, pop: pd.DataFrame) -> pd.DataFrame:
        """
        Calculate eligibility and reimbursement for a validated record table.
        """
        df = pd.DataFrame({
            "id": pop["id"].to_numpy(),
            "eligible": eligibility_mask(pop, self.params, self.codebook),
            "reimbursement": reimbursement_amounts(pop, self.params, self.codebook),
            "survey_weight": pop["survey_weight"].to_numpy(dtype=float),
            "income_category": pop["income_category"].to_numpy(),
        }, columns=RESULT_COLUMNS)
        return df

    def run(self, records: Records, n_jobs: int = 1) -> SimulationRun:
        """
        Run the scenario over all records.

        Args:
            records: Record table or a sequence of IndividualRecord / mappings
            n_jobs: Number of worker threads; 1 evaluates in a single pass

        Returns:
            SimulationRun with one result row per record, in input order

        Raises:
            RecordSchemaError: If any record lacks a required field. The
                whole batch is rejected.
        """
        if isinstance(records, pd.DataFrame):
            pop = validate_record_table(records)
        else:
            pop = validate_record_table(records_to_frame(records))

        if n_jobs < 1:
            raise ValueError(f"n_jobs must be at least 1, got {n_jobs}")

        if n_jobs == 1 or len(pop) < 2:
            table = self.calculate(pop)
        else:
            chunks = np.array_split(np.arange(len(pop)), min(n_jobs, len(pop)))
            with ThreadPoolExecutor(max_workers=n_jobs) as executor:
                parts = list(executor.map(lambda idx: self.calculate(pop.iloc[idx]), chunks))
            table = pd.concat(parts, ignore_index=True)

        logger.info(
            f"Scenario '{self.params.name}': {len(table):,} records, "
            f"{int(table['eligible'].sum()):,} eligible"
        )
        return SimulationRun(params=self.params, table=table)


def run(records: Records, params: PolicyParameters, n_jobs: int = 1) -> SimulationRun:
    """Run one scenario with the default codebook."""
    return ReimbursementCalculator(params).run(records, n_jobs=n_jobs)


def run_scenarios(records: Records, *params: PolicyParameters) -> List[SimulationRun]:
    """Run several scenarios over the same records."""
    if not params:
        raise ValueError("At least one policy parameter set is required")
    if not isinstance(records, pd.DataFrame):
        records = records_to_frame(records)
    return [run(records, p) for p in params]


__all__ = [
    "RESULT_COLUMNS",
    "RecordSchemaError",
    "ReimbursementCalculator",
    "SimulationResult",
    "SimulationRun",
    "eligibility_mask",
    "is_eligible",
    "reimbursement",
    "reimbursement_amounts",
    "run",
    "run_scenarios",
]
