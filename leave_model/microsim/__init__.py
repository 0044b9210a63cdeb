"""Microsimulation engine for paid-leave reimbursement analysis."""

from .engine import (
    ReimbursementCalculator,
    SimulationResult,
    SimulationRun,
    eligibility_mask,
    is_eligible,
    reimbursement,
    reimbursement_amounts,
    run,
    run_scenarios,
)
from .data_generator import SyntheticSurvey

__all__ = [
    "ReimbursementCalculator",
    "SimulationResult",
    "SimulationRun",
    "SyntheticSurvey",
    "eligibility_mask",
    "is_eligible",
    "reimbursement",
    "reimbursement_amounts",
    "run",
    "run_scenarios",
]
