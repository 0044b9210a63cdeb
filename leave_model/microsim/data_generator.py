import numpy as np
import pandas as pd
from dataclasses import dataclass

from ..codebook import INCOME_CODEBOOK, POVERTY_CODEBOOK

# Relative frequency of each income code. Roll-up and sentinel codes are
# included so the bracket exclusion rules are exercised.
INCOME_SHARES = {
    10: 0.03,
    11: 0.22,
    12: 0.15,
    13: 0.20,
    20: 0.14,
    21: 0.02,
    22: 0.20,
    96: 0.01,
    97: 0.01,
    98: 0.01,
    99: 0.01,
}


@dataclass
class SyntheticSurvey:
    """
    Generates synthetic survey respondents for microsimulation.
    In a production run, this would load the IPUMS NHIS extract.
    """
    size: int = 10_000
    seed: int = 2025

    def generate(self) -> pd.DataFrame:
        """
        Generate a synthetic record table with realistic(ish) work-loss,
        weight and income distributions.
        """
        rng = np.random.default_rng(self.seed)
        n = self.size

        # 1. Work-loss days
        # Most respondents miss no work; the rest are heavy-tailed
        any_loss = rng.random(n) < 0.45
        days = np.rint(rng.lognormal(mean=1.3, sigma=1.1, size=n))
        # A small share report long absences (beyond the 12-week cap)
        long_absence = rng.random(n) < 0.02
        days = np.where(long_absence, rng.integers(85, 366, n), days)
        work_loss_days = np.where(any_loss, np.clip(days, 1, 365), 0).astype(int)

        # 2. Income and poverty categories
        # Codes missing from INCOME_SHARES get a minimal share
        income_codes = np.array(sorted(INCOME_CODEBOOK.labels))
        income_p = np.array([INCOME_SHARES.get(c, 0.01) for c in income_codes])
        income_category = rng.choice(income_codes, size=n, p=income_p / income_p.sum())

        poverty_codes = np.array(sorted(POVERTY_CODEBOOK.labels))
        poverty_ratio = rng.choice(poverty_codes, size=n)

        # 3. Weights
        # Each respondent represents a few thousand adults
        survey_weight = rng.gamma(shape=4.0, scale=1_000.0, size=n)

        df = pd.DataFrame({
            'id': range(n),
            'work_loss_days': work_loss_days,
            'survey_weight': survey_weight,
            'income_category': income_category,
            'poverty_ratio': poverty_ratio,
        })

        return df

if __name__ == "__main__":
    survey = SyntheticSurvey()
    df = survey.generate()
    print(df.describe())
