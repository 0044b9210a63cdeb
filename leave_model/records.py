"""
Individual survey records and the record-table schema.

The engine works on a pandas DataFrame with one row per respondent. The
frozen ``IndividualRecord`` mirrors one row for the scalar evaluators.
"""

from dataclasses import asdict, dataclass, fields
from typing import Iterable, List, Mapping, Union

import numpy as np
import pandas as pd


class RecordSchemaError(ValueError):
    """A record or record table is missing a required field."""


REQUIRED_FIELDS = (
    "work_loss_days",
    "survey_weight",
    "income_category",
    "poverty_ratio",
)

RECORD_COLUMNS = ("id",) + REQUIRED_FIELDS


@dataclass(frozen=True)
class IndividualRecord:
    """
    One survey respondent.

    Attributes:
        id: Positional identifier in the source table (not a survey ID)
        work_loss_days: Self-reported missed workdays in the reference year
        survey_weight: Sampling weight (PERWEIGHT); aggregation only
        income_category: Family-income category code (INCFAM97ON2)
        poverty_ratio: Ratio-to-poverty category code (POVERTY)
    """
    id: int
    work_loss_days: int
    survey_weight: float
    income_category: int
    poverty_ratio: int


RecordLike = Union[IndividualRecord, Mapping]


def _record_as_dict(record: RecordLike, position: int) -> dict:
    if isinstance(record, IndividualRecord):
        return asdict(record)

    missing = [f for f in REQUIRED_FIELDS if f not in record]
    if missing:
        raise RecordSchemaError(
            f"Record at position {position} is missing required fields: {missing}"
        )
    row = {f: record[f] for f in REQUIRED_FIELDS}
    row["id"] = record.get("id", position)
    return row


def records_to_frame(records: Iterable[RecordLike]) -> pd.DataFrame:
    """
    Build a record table from IndividualRecord objects or mappings.

    Mappings without an ``id`` are assigned their position.

    Raises:
        RecordSchemaError: If any record lacks a required field
    """
    rows = [_record_as_dict(r, i) for i, r in enumerate(records)]
    return pd.DataFrame(rows, columns=list(RECORD_COLUMNS))


def frame_to_records(df: pd.DataFrame) -> List[IndividualRecord]:
    """Convert a validated record table back to IndividualRecord objects."""
    df = validate_record_table(df)
    names = [f.name for f in fields(IndividualRecord)]
    return [
        IndividualRecord(
            id=int(row.id),
            work_loss_days=int(row.work_loss_days),
            survey_weight=float(row.survey_weight),
            income_category=int(row.income_category),
            poverty_ratio=int(row.poverty_ratio),
        )
        for row in df[names].itertuples(index=False)
    ]


def validate_record_table(df: pd.DataFrame) -> pd.DataFrame:
    """
    Check a record table for the required columns and return a clean copy.

    An ``id`` column is added by position when absent. Upstream cleaning is
    assumed; only presence and completeness of the required fields is
    checked here.

    Raises:
        RecordSchemaError: If a required column is absent or holds missing
            values
    """
    missing = [c for c in REQUIRED_FIELDS if c not in df.columns]
    if missing:
        raise RecordSchemaError(f"Record table is missing required columns: {missing}")

    null_counts = df[list(REQUIRED_FIELDS)].isna().sum()
    incomplete = null_counts[null_counts > 0]
    if not incomplete.empty:
        raise RecordSchemaError(
            f"Record table has missing values in required columns: {incomplete.to_dict()}"
        )

    out = df.copy()
    if "id" not in out.columns:
        out.insert(0, "id", np.arange(len(out)))
    return out


__all__ = [
    "IndividualRecord",
    "RecordSchemaError",
    "REQUIRED_FIELDS",
    "RECORD_COLUMNS",
    "records_to_frame",
    "frame_to_records",
    "validate_record_table",
]
