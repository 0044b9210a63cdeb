"""
Pytest fixtures for paid-leave reimbursement tests.
"""

import pytest
import pandas as pd
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from leave_model.policies import ADJUSTED, COUNTERFACTUAL
from leave_model.records import IndividualRecord
from leave_model.microsim import SyntheticSurvey


# =============================================================================
# POLICY FIXTURES
# =============================================================================

@pytest.fixture
def counterfactual_policy():
    """Universal credit: 12 weeks, no waiting period, no income test."""
    return COUNTERFACTUAL


@pytest.fixture
def adjusted_policy():
    """Targeted credit: 28-day waiting period, income test, 9 weeks."""
    return ADJUSTED


# =============================================================================
# DATA FIXTURES
# =============================================================================

@pytest.fixture
def make_record():
    """Factory for single records with sensible defaults."""
    def _make(work_loss_days=0, poverty_ratio=20, survey_weight=1.0,
              income_category=12, id=0):
        return IndividualRecord(
            id=id,
            work_loss_days=work_loss_days,
            survey_weight=survey_weight,
            income_category=income_category,
            poverty_ratio=poverty_ratio,
        )
    return _make


@pytest.fixture
def small_records():
    """Hand-built record table covering each branch of the formula."""
    return pd.DataFrame({
        "id": [0, 1, 2, 3, 4, 5, 6],
        "work_loss_days": [0, 10, 50, 84, 91, 200, 50],
        "survey_weight": [1000.0, 2000.0, 1500.0, 500.0, 800.0, 1200.0, 900.0],
        "income_category": [11, 12, 13, 20, 22, 97, 10],
        "poverty_ratio": [11, 20, 38, 31, 40, 23, 99],
    })


@pytest.fixture
def synthetic_records():
    """Synthetic survey with a fixed seed."""
    return SyntheticSurvey(size=2_000, seed=7).generate()
