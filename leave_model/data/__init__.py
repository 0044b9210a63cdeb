"""
Data integration layer for leave_model.

This package loads the IPUMS NHIS survey extract into the record table
used by the reimbursement engine.

Example usage:
    >>> from leave_model.data import load_nhis_extract
    >>> records = load_nhis_extract("data/nhis_00004/nhis_00004.csv")
"""

from leave_model.data.nhis import (
    NHIS_COLUMNS,
    WORK_LOSS_SENTINEL_FLOOR,
    load_nhis_extract,
    prepare_nhis_frame,
)

__all__ = [
    'NHIS_COLUMNS',
    'WORK_LOSS_SENTINEL_FLOOR',
    'load_nhis_extract',
    'prepare_nhis_frame',
]
