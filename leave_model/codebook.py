"""
Survey Codebook Tables

Categorical codes in the NHIS extract (family income, ratio to poverty)
are codebook artifacts rather than business rules. They are kept here as
named lookup tables so that a new survey year's codebook is a data change.

Key features:
- Code -> label lookup for each categorical variable
- Explicit exclusion of roll-up and sentinel codes from bracket tables
- Recognition check for out-of-domain codes
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Mapping, Optional


@dataclass(frozen=True)
class Codebook:
    """
    Lookup table for one categorical survey variable.

    Attributes:
        name: Variable name in the source extract (e.g., "INCFAM97ON2")
        labels: Mapping of recognized code -> human-readable label
        excluded: Recognized codes that are not usable brackets (roll-ups)
        sentinel_floor: Codes at or above this value are missing-data
            sentinels (NIU, refused, not ascertained, don't know)
    """
    name: str
    labels: Mapping[int, str]
    excluded: FrozenSet[int] = field(default_factory=frozenset)
    sentinel_floor: Optional[int] = None

    def is_sentinel(self, code) -> bool:
        return self.sentinel_floor is not None and code >= self.sentinel_floor

    def is_recognized(self, code) -> bool:
        """True if the code appears in the codebook (sentinels included)."""
        return int(code) in self.labels

    def is_bracket(self, code) -> bool:
        """True if the code is a usable bracket for stratified tables."""
        return (
            self.is_recognized(code)
            and not self.is_sentinel(code)
            and int(code) not in self.excluded
        )

    def bracket_codes(self) -> List[int]:
        """Usable bracket codes in ascending order."""
        return sorted(c for c in self.labels if self.is_bracket(c))

    def label(self, code) -> str:
        return self.labels.get(int(code), f"Unknown code {code}")


# =============================================================================
# NHIS CODEBOOKS
# =============================================================================

# Total combined family income (INCFAM97ON2). Codes 10 and 21 are
# "no further detail" roll-ups that overlap the detailed brackets.
INCOME_LABELS: Dict[int, str] = {
    10: "$0 - $34,999 (no further detail)",
    11: "$0 - $34,999",
    12: "$35,000 - $49,999",
    13: "$50,000 - $74,999",
    20: "$75,000 - $99,999",
    21: "$75,000 and over (no further detail)",
    22: "$100,000 and over",
    96: "NIU",
    97: "Unknown - refused",
    98: "Unknown - not ascertained",
    99: "Unknown - don't know",
}

INCOME_CODEBOOK = Codebook(
    name="INCFAM97ON2",
    labels=INCOME_LABELS,
    excluded=frozenset({10, 21}),
    sentinel_floor=96,
)

# Ratio of family income to poverty threshold (POVERTY). Code 38 sits
# numerically above the 5.00+ category but covers "2.00 and over".
POVERTY_LABELS: Dict[int, str] = {
    10: "Less than 1.00",
    11: "Less than 0.50",
    12: "0.50 - 0.74",
    13: "0.75 - 0.99",
    14: "Less than 1.00 (no further detail)",
    20: "1.00 - 1.99",
    21: "1.00 - 1.24",
    22: "1.25 - 1.49",
    23: "1.50 - 1.74",
    24: "1.75 - 1.99",
    25: "1.00 - 1.99 (no further detail)",
    30: "2.00 and over",
    31: "2.00 - 2.49",
    32: "2.50 - 2.99",
    33: "3.00 - 3.49",
    34: "3.50 - 3.99",
    35: "4.00 - 4.49",
    36: "4.50 - 4.99",
    37: "5.00 and over",
    38: "2.00 and over (no further detail)",
    98: "Undefinable",
    99: "Unknown",
}

POVERTY_CODEBOOK = Codebook(
    name="POVERTY",
    labels=POVERTY_LABELS,
    # Headers and "no further detail" codes overlapping the detailed
    # categories. Eligibility reads only is_recognized; this set applies
    # when POVERTY is tabulated as brackets.
    excluded=frozenset({10, 14, 20, 25, 30, 38}),
    sentinel_floor=98,
)


__all__ = [
    "Codebook",
    "INCOME_LABELS",
    "INCOME_CODEBOOK",
    "POVERTY_LABELS",
    "POVERTY_CODEBOOK",
]
