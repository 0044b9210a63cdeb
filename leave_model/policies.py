"""
Policy Parameter Definitions

Defines the parameter set for a paid-leave reimbursement credit and the
two scenarios studied: a universal counterfactual and an adjusted,
income-targeted variant.

The benefit mirrors a capped paid-leave statute: a per-day rate
(weekly_rate / 7) up to a day threshold, an optional employer-paid waiting
period (offset_days) before reimbursement begins, and a flat cap of
max_weeks at the weekly rate beyond the threshold.
"""

import math
import numbers
from dataclasses import dataclass, field, replace as _dc_replace
from typing import Dict, Optional, Tuple


class PolicyParameterError(ValueError):
    """Invalid policy parameter set."""


# =============================================================================
# STUDIED PARAMETERS
# =============================================================================

WEEKLY_RATE = 1194.0  # Reimbursement dollars per week, both scenarios

# Poverty codes admitted despite sitting above the ceiling (codebook artifact)
DEFAULT_ADMISSIBLE_POVERTY_CODES: Tuple[int, ...] = (38,)


@dataclass(frozen=True)
class PolicyParameters:
    """
    Immutable parameters for one simulated reimbursement scenario.

    Attributes:
        name: Scenario label (e.g., "counterfactual", "adjusted")
        min_eligible_days: Work-loss days must strictly exceed this value
        day_threshold_for_cap: At or below, reimbursement is proportional;
            above, it is capped
        weekly_rate: Reimbursement dollars per week
        max_weeks: Number of weeks paid at the cap
        offset_days: Days subtracted before proportional reimbursement
            (employer-paid waiting period)
        poverty_ceiling: Exclusive upper bound on the poverty-ratio code for
            eligibility (None = no income test)
        admissible_poverty_codes: Codes eligible regardless of the ceiling
        description: Free-text description for reports
    """
    name: str
    min_eligible_days: float = 0
    day_threshold_for_cap: float = 84
    weekly_rate: float = WEEKLY_RATE
    max_weeks: float = 12
    offset_days: float = 0
    poverty_ceiling: Optional[float] = None
    admissible_poverty_codes: Tuple[int, ...] = field(
        default=DEFAULT_ADMISSIBLE_POVERTY_CODES
    )
    description: str = ""

    _NON_NEGATIVE = (
        "min_eligible_days",
        "day_threshold_for_cap",
        "weekly_rate",
        "max_weeks",
        "offset_days",
    )

    def __post_init__(self):
        """Validate parameters at construction; never coerce."""
        for name in self._NON_NEGATIVE:
            self._check_number(name, getattr(self, name))
        if self.poverty_ceiling is not None:
            self._check_number("poverty_ceiling", self.poverty_ceiling)

        if self.offset_days > self.day_threshold_for_cap:
            raise PolicyParameterError(
                f"{self.name}: offset_days ({self.offset_days}) exceeds "
                f"day_threshold_for_cap ({self.day_threshold_for_cap})"
            )
        # Keeps (days - offset) non-negative for every eligible record
        if self.offset_days > self.min_eligible_days:
            raise PolicyParameterError(
                f"{self.name}: offset_days ({self.offset_days}) exceeds "
                f"min_eligible_days ({self.min_eligible_days})"
            )

        codes = self.admissible_poverty_codes
        if isinstance(codes, (str, bytes)):
            raise PolicyParameterError(
                f"{self.name}: admissible_poverty_codes must be integer codes, got {codes!r}"
            )
        try:
            codes = tuple(codes)
        except TypeError:
            raise PolicyParameterError(
                f"{self.name}: admissible_poverty_codes must be a collection of "
                f"integer codes, got {type(codes).__name__}"
            ) from None
        if not all(isinstance(c, numbers.Integral) and not isinstance(c, bool) for c in codes):
            raise PolicyParameterError(
                f"{self.name}: admissible_poverty_codes must be integer codes, got {codes!r}"
            )
        object.__setattr__(self, "admissible_poverty_codes", codes)

    def _check_number(self, name: str, value) -> None:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise PolicyParameterError(
                f"{self.name}: {name} must be numeric, got {type(value).__name__}"
            )
        if not math.isfinite(value):
            raise PolicyParameterError(
                f"{self.name}: {name} must be finite, got {value}"
            )
        if value < 0:
            raise PolicyParameterError(
                f"{self.name}: {name} must be non-negative, got {value}"
            )

    @property
    def daily_rate(self) -> float:
        """Reimbursement per work-loss day on the proportional branch."""
        return self.weekly_rate / 7

    @property
    def max_benefit(self) -> float:
        """Flat reimbursement above the day threshold."""
        return self.weekly_rate * self.max_weeks

    @property
    def has_income_test(self) -> bool:
        return self.poverty_ceiling is not None

    def replace(self, **changes) -> "PolicyParameters":
        """Return a new, re-validated parameter set with fields changed."""
        return _dc_replace(self, **changes)

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "min_eligible_days": self.min_eligible_days,
            "day_threshold_for_cap": self.day_threshold_for_cap,
            "weekly_rate": self.weekly_rate,
            "max_weeks": self.max_weeks,
            "offset_days": self.offset_days,
            "poverty_ceiling": self.poverty_ceiling,
            "admissible_poverty_codes": list(self.admissible_poverty_codes),
        }


# =============================================================================
# PRESET SCENARIOS
# =============================================================================

COUNTERFACTUAL = PolicyParameters(
    name="counterfactual",
    min_eligible_days=0,
    day_threshold_for_cap=84,
    weekly_rate=WEEKLY_RATE,
    max_weeks=12,
    offset_days=0,
    description="Universal credit: any work-loss day, up to 12 weeks",
)

ADJUSTED = PolicyParameters(
    name="adjusted",
    min_eligible_days=28,
    day_threshold_for_cap=91,
    weekly_rate=WEEKLY_RATE,
    max_weeks=9,
    offset_days=28,
    poverty_ceiling=37,
    description=(
        "Targeted credit: 4-week employer-paid waiting period, "
        "income test below 5x poverty, up to 9 weeks"
    ),
)

PRESET_POLICIES: Dict[str, PolicyParameters] = {
    COUNTERFACTUAL.name: COUNTERFACTUAL,
    ADJUSTED.name: ADJUSTED,
}


def get_policy(name: str) -> PolicyParameters:
    """Look up a preset scenario by name."""
    try:
        return PRESET_POLICIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown policy preset: {name!r}. Available: {sorted(PRESET_POLICIES)}"
        ) from None


__all__ = [
    "PolicyParameters",
    "PolicyParameterError",
    "WEEKLY_RATE",
    "DEFAULT_ADMISSIBLE_POVERTY_CODES",
    "COUNTERFACTUAL",
    "ADJUSTED",
    "PRESET_POLICIES",
    "get_policy",
]
