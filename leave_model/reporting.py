"""
Reporting Module

Generates formatted text reports and CSV exports for reimbursement
scenario comparisons.
"""

import logging

import numpy as np

from .comparison import ScenarioComparison

logger = logging.getLogger(__name__)


class ScenarioReport:
    """
    Generate reimbursement reports for a scenario comparison.
    """

    def __init__(self, comparison: ScenarioComparison):
        self.comparison = comparison

    def generate_text_report(self) -> str:
        """Generate a detailed text report."""
        lines = []

        # Header
        lines.append("=" * 70)
        lines.append("PAID-LEAVE REIMBURSEMENT MICROSIMULATION REPORT")
        lines.append("=" * 70)
        lines.append("")

        # Policy parameters
        lines.append("POLICY PARAMETERS")
        lines.append("-" * 70)
        lines.append(f"{'Scenario':<16} {'Min Days':>9} {'Offset':>7} {'Cap Day':>8} "
                     f"{'Weekly $':>9} {'Weeks':>6} {'Pov. Ceil':>10}")
        for run in self.comparison.runs:
            p = run.params
            ceiling = f"{p.poverty_ceiling:g}" if p.poverty_ceiling is not None else "none"
            lines.append(f"{p.name:<16} {p.min_eligible_days:>9g} {p.offset_days:>7g} "
                         f"{p.day_threshold_for_cap:>8g} {p.weekly_rate:>9,.0f} "
                         f"{p.max_weeks:>6g} {ceiling:>10}")
        lines.append("")

        # Headline figures
        lines.append("POPULATION ESTIMATES (survey-weighted)")
        lines.append("-" * 70)
        lines.append(f"{'Scenario':<16} {'Mean $':>12} {'Eligible':>16} {'Share':>8} {'Cost ($M)':>14}")
        for name in self.comparison.names:
            s = self.comparison.summaries[name]
            lines.append(f"{name:<16} {s.mean_reimbursement:>12,.2f} {s.total_eligible:>16,.0f} "
                         f"{s.eligible_share*100:>7.1f}% {s.total_cost/1e6:>14,.1f}")
        lines.append("")

        # Spread
        lines.append("REIMBURSEMENT DISTRIBUTION (unweighted)")
        lines.append("-" * 70)
        describe = self.comparison.describe_table()
        lines.append(f"{'Scenario':<16} {'Mean':>12} {'SD':>12} {'Min':>12} {'Max':>12}")
        for row in describe.itertuples(index=False):
            lines.append(f"{row.Scenario:<16} {row.Mean:>12,.2f} {row.SD:>12,.2f} "
                         f"{row.Min:>12,.2f} {row.Max:>12,.2f}")
        lines.append("")

        # Income brackets
        lines.append("MEAN REIMBURSEMENT BY FAMILY INCOME (unweighted)")
        lines.append("-" * 70)
        brackets = self.comparison.bracket_table()
        names = self.comparison.names
        header = f"{'Income':<24}" + "".join(f"{n[:14]:>15}" for n in names)
        if "Difference" in brackets.columns:
            header += f"{'Difference':>15}"
        lines.append(header)
        for _, row in brackets.iterrows():
            line = f"{row['income_label'][:23]:<24}"
            for n in names:
                value = row[n]
                line += f"{'n/a':>15}" if np.isnan(value) else f"{value:>15,.2f}"
            if "Difference" in brackets.columns:
                diff = row["Difference"]
                line += f"{'n/a':>15}" if np.isnan(diff) else f"{diff:>15,.2f}"
            lines.append(line)
        lines.append("")

        # Notes
        lines.append("NOTES")
        lines.append("-" * 40)
        lines.append("- Population estimates use survey weights (PERWEIGHT)")
        lines.append("- Income-bracket means are unweighted group means")
        lines.append("- Roll-up and unknown income codes are excluded from brackets")
        lines.append("")

        return "\n".join(lines)

    def export_to_csv(self, filepath: str):
        """Export the per-scenario summary table to a CSV file."""
        df = self.comparison.describe_table()
        df.to_csv(filepath, index=False)
        logger.info(f"Results exported to {filepath}")


__all__ = ["ScenarioReport"]
