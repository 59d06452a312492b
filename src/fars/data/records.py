"""
FARS Record Schema

Column names consumed by this package and a typed per-row view of an
accident table.  Loaded tables keep pandas' inferred dtypes; code that
needs specific fields calls ``require_columns`` first and gets a
``SchemaError`` naming what is missing instead of a bare ``KeyError``.

Package Location: src/fars/data/records.py
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

# ---------------------------------------------------------------------------
# Source column names (as spelled in the FARS files)
# ---------------------------------------------------------------------------
STATE: str = "STATE"
MONTH: str = "MONTH"
YEAR: str = "YEAR"
LATITUDE: str = "LATITUDE"
LONGITUDE: str = "LONGITUD"

CORE_COLUMNS: List[str] = [STATE, MONTH, YEAR, LATITUDE, LONGITUDE]


class SchemaError(ValueError):
    """Raised when a table lacks columns an operation needs."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"missing required column(s): {', '.join(self.missing)}")


@dataclass(frozen=True)
class AccidentRecord:
    """One accident row with the fields this package reads typed explicitly.

    ``month`` / ``year`` are ``None`` when blank in the source.
    ``latitude`` / ``longitude`` are ``None`` when the source value is
    missing or was replaced by ``sanitize_coordinates``.  Every other
    column of the row is kept untyped in ``extra``.
    """

    state: int
    month: Optional[int]
    year: Optional[int]
    latitude: Optional[float]
    longitude: Optional[float]
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None


def require_columns(df: pd.DataFrame, columns: Iterable[str]) -> None:
    """
    Check that *df* carries every name in *columns*.

    Raises:
        SchemaError: Listing the absent columns in the order requested.
    """
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise SchemaError(missing)


def to_records(df: pd.DataFrame) -> List[AccidentRecord]:
    """
    Convert an accident table to a list of ``AccidentRecord``.

    Args:
        df: Table with at least the ``CORE_COLUMNS``.

    Returns:
        One record per row, in row order.

    Raises:
        SchemaError: If a core column is missing.
    """
    require_columns(df, CORE_COLUMNS)

    records: List[AccidentRecord] = []
    for row in df.to_dict(orient="records"):
        records.append(AccidentRecord(
            state=int(row.pop(STATE)),
            month=_optional_int(row.pop(MONTH)),
            year=_optional_int(row.pop(YEAR)),
            latitude=_optional_float(row.pop(LATITUDE)),
            longitude=_optional_float(row.pop(LONGITUDE)),
            extra=row,
        ))
    return records


def _optional_int(value: Any) -> Optional[int]:
    value = _optional_float(value)
    return None if value is None else int(value)


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value is pd.NA:
        return None
    value = float(value)
    return None if math.isnan(value) else value
