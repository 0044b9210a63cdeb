"""
IPUMS NHIS extract loader.

Reads the survey extract and produces the record table consumed by the
reimbursement engine. Only the four variables the engine needs are
loaded; modeling covariates stay in the raw extract.
"""

import logging
from pathlib import Path
from typing import Dict, Union

import numpy as np
import pandas as pd

from ..records import REQUIRED_FIELDS, RecordSchemaError

logger = logging.getLogger(__name__)


# Source variable -> record field
NHIS_COLUMNS: Dict[str, str] = {
    "WLDAYR": "work_loss_days",
    "PERWEIGHT": "survey_weight",
    "INCFAM97ON2": "income_category",
    "POVERTY": "poverty_ratio",
}

# WLDAYR codes at or above this are NIU / refused / not ascertained / don't know
WORK_LOSS_SENTINEL_FLOOR = 996


def prepare_nhis_frame(raw: pd.DataFrame) -> pd.DataFrame:
    """
    Clean an in-memory NHIS extract into the record table.

    Drops rows with work-loss sentinel codes, missing values or
    non-positive weights, renames columns to the record schema and assigns
    positional ids after filtering.

    Raises:
        RecordSchemaError: If a source variable is missing from the extract
    """
    missing = [c for c in NHIS_COLUMNS if c not in raw.columns]
    if missing:
        raise RecordSchemaError(f"NHIS extract is missing variables: {missing}")

    df = raw[list(NHIS_COLUMNS)].rename(columns=NHIS_COLUMNS)
    n_raw = len(df)

    df = df.dropna(subset=list(REQUIRED_FIELDS))
    n_missing = n_raw - len(df)

    sentinel = df["work_loss_days"] >= WORK_LOSS_SENTINEL_FLOOR
    bad_weight = df["survey_weight"] <= 0
    df = df.loc[~(sentinel | bad_weight)]

    if n_missing:
        logger.warning(f"Dropped {n_missing:,} NHIS rows with missing values")
    if sentinel.any():
        logger.warning(f"Dropped {int(sentinel.sum()):,} NHIS rows with WLDAYR sentinel codes")
    if bad_weight.any():
        logger.warning(f"Dropped {int(bad_weight.sum()):,} NHIS rows with non-positive PERWEIGHT")

    df = df.astype({
        "work_loss_days": int,
        "survey_weight": float,
        "income_category": int,
        "poverty_ratio": int,
    })
    df.insert(0, "id", np.arange(len(df)))
    return df.reset_index(drop=True)


def load_nhis_extract(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load an IPUMS NHIS CSV extract as a record table.

    Args:
        path: Path to the extract CSV (e.g., nhis_00004.csv)

    Returns:
        Record table with id, work_loss_days, survey_weight,
        income_category, poverty_ratio
    """
    path = Path(path)
    logger.info(f"Loading NHIS extract from {path}")

    # Read header only first to validate columns
    header = pd.read_csv(path, nrows=0).columns.tolist()
    missing = [c for c in NHIS_COLUMNS if c not in header]
    if missing:
        raise RecordSchemaError(f"NHIS extract {path.name} is missing variables: {missing}")

    raw = pd.read_csv(path, usecols=list(NHIS_COLUMNS))
    df = prepare_nhis_frame(raw)
    logger.info(f"Loaded {len(df):,} of {len(raw):,} NHIS records")
    return df


__all__ = [
    "NHIS_COLUMNS",
    "WORK_LOSS_SENTINEL_FLOOR",
    "prepare_nhis_frame",
    "load_nhis_extract",
]
