"""
Paid-Leave Reimbursement Microsimulation

A rule-based framework for estimating work-loss reimbursements under
alternative paid-leave credit designs using household health survey
microdata.
"""

from .codebook import Codebook, INCOME_CODEBOOK, POVERTY_CODEBOOK
from .records import IndividualRecord, RecordSchemaError
from .policies import (
    PolicyParameters,
    PolicyParameterError,
    COUNTERFACTUAL,
    ADJUSTED,
    PRESET_POLICIES,
    get_policy,
)
from .microsim import (
    ReimbursementCalculator,
    SimulationResult,
    SimulationRun,
    is_eligible,
    reimbursement,
    run,
)
from .distribution import (
    AggregateSummary,
    summarize,
    income_bracket_means,
    weighted_income_bracket_means,
    eligible_by_income,
)
from .comparison import ScenarioComparison, compare
from .reporting import ScenarioReport

__version__ = "1.0.0"
__all__ = [
    "Codebook",
    "INCOME_CODEBOOK",
    "POVERTY_CODEBOOK",
    "IndividualRecord",
    "RecordSchemaError",
    "PolicyParameters",
    "PolicyParameterError",
    "COUNTERFACTUAL",
    "ADJUSTED",
    "PRESET_POLICIES",
    "get_policy",
    "ReimbursementCalculator",
    "SimulationResult",
    "SimulationRun",
    "is_eligible",
    "reimbursement",
    "run",
    "AggregateSummary",
    "summarize",
    "income_bracket_means",
    "weighted_income_bracket_means",
    "eligible_by_income",
    "ScenarioComparison",
    "compare",
    "ScenarioReport",
]
