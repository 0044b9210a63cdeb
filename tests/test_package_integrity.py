"""
Regression tests for package wiring and the end-to-end scenario flow.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

import leave_model
from leave_model import (
    ADJUSTED,
    COUNTERFACTUAL,
    PRESET_POLICIES,
    ScenarioReport,
    compare,
    income_bracket_means,
    run,
    summarize,
)
from leave_model.data import load_nhis_extract
from leave_model.microsim import SyntheticSurvey


def test_package_level_exports():
    for name in leave_model.__all__:
        assert hasattr(leave_model, name), f"Missing export: {name}"


def test_presets_registered():
    assert PRESET_POLICIES["counterfactual"] is COUNTERFACTUAL
    assert PRESET_POLICIES["adjusted"] is ADJUSTED


def test_end_to_end_synthetic_flow():
    records = SyntheticSurvey(size=1_000).generate()

    runs = [run(records, policy) for policy in PRESET_POLICIES.values()]
    summaries = [summarize(r) for r in runs]
    brackets = income_bracket_means(runs[0])
    report = ScenarioReport(compare(*runs)).generate_text_report()

    assert all(s.n_records == 1_000 for s in summaries)
    assert len(brackets) > 0
    assert "PAID-LEAVE REIMBURSEMENT" in report


def test_end_to_end_from_csv(tmp_path):
    raw = SyntheticSurvey(size=200).generate().rename(columns={
        "work_loss_days": "WLDAYR",
        "survey_weight": "PERWEIGHT",
        "income_category": "INCFAM97ON2",
        "poverty_ratio": "POVERTY",
    }).drop(columns="id")
    path = tmp_path / "extract.csv"
    raw.to_csv(path, index=False)

    records = load_nhis_extract(path)
    summary = summarize(run(records, ADJUSTED))

    assert summary.n_records == 200
    assert summary.max <= ADJUSTED.max_benefit + 1e-6
    assert summary.min >= 0
    assert summary.mean_reimbursement == pytest.approx(summary.total_cost / summary.population)
