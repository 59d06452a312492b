"""
FARS Year Aggregation (Imperative Shell)

Loads one accident file per requested year, keeps only the month and year
fields, and hands the resulting tables to the Functional Core
(analysis/summary.py) for counting.

Package Location: src/fars/data/years.py

Partial Failure Rule:
    A year whose file is missing, unreadable or lacks the month/year
    columns does not abort the batch.  It is recorded as a failed
    ``YearResult`` (table ``None``), a warning naming the year is added to
    ``YearBatch.warnings`` and logged, and the remaining years are still
    processed.  Results always line up one-to-one with the input years.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from .reader import ReadOptions, TableNotFoundError, as_year_list, load_year
from .records import MONTH, YEAR, SchemaError, require_columns
from ..analysis.summary import MONTH_COL, YEAR_COL, monthly_counts

logger = logging.getLogger(__name__)


class FailureKind(enum.Enum):
    """Why a year produced no table."""

    NOT_FOUND = "not_found"
    MISSING_COLUMNS = "missing_columns"
    UNREADABLE = "unreadable"


@dataclass(frozen=True)
class YearResult:
    """Outcome of loading a single year."""

    year: object
    table: Optional[pd.DataFrame] = None
    failure: Optional[FailureKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass
class YearBatch:
    """Per-year results of ``aggregate_years`` in input order."""

    results: List[YearResult] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def tables(self) -> List[Optional[pd.DataFrame]]:
        """Month/year table per input year, ``None`` where loading failed."""
        return [r.table for r in self.results]

    @property
    def loaded_years(self) -> List[int]:
        return [int(r.year) for r in self.results if r.ok]

    @property
    def failed_years(self) -> List[object]:
        return [r.year for r in self.results if not r.ok]

    def __len__(self) -> int:
        return len(self.results)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def aggregate_years(years, options: Optional[ReadOptions] = None) -> YearBatch:
    """
    Load the month and year fields for each requested year.

    Args:
        years: A single year or an iterable of years (int or
            int-coercible).
        options: Loader configuration, including the data directory.

    Returns:
        ``YearBatch`` with one ``YearResult`` per input year.  Successful
        results carry a DataFrame with exactly the columns
        ``['month', 'year']``.
    """
    options = options or ReadOptions()
    batch = YearBatch()

    for yr in as_year_list(years):
        result = _load_month_year(yr, options)
        batch.results.append(result)
        if not result.ok:
            warning = f"invalid year: {yr} ({result.message})"
            batch.warnings.append(warning)
            logger.warning(
                warning,
                extra={"year": str(yr), "failure": result.failure.value},
            )

    logger.debug(
        f"Aggregated {len(batch.loaded_years)}/{len(batch)} years",
        extra={"failed": [str(y) for y in batch.failed_years]},
    )
    return batch


def summarize_years(years, options: Optional[ReadOptions] = None) -> pd.DataFrame:
    """
    Number of cases per month for each requested year, in wide format.

    Years that fail to load are skipped (see ``aggregate_years``); if all
    of them fail the result has only the ``month`` column.

    Args:
        years: A single year or an iterable of years.
        options: Loader configuration.

    Returns:
        DataFrame with 12 rows (``month`` 1-12) and one ``Int64`` column
        per loaded year, named ``"2013"``, ``"2014"``, ... ascending.

    Example::

        summarize_years(range(2013, 2016)).columns.tolist()
        # ['month', '2013', '2014', '2015']
    """
    return monthly_counts(aggregate_years(years, options).tables)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _load_month_year(yr, options: ReadOptions) -> YearResult:
    """Load one year and project it, converting failures to a result."""
    try:
        df = load_year(yr, options)
        require_columns(df, [MONTH, YEAR])
    except TableNotFoundError as exc:
        return YearResult(yr, failure=FailureKind.NOT_FOUND, message=str(exc))
    except SchemaError as exc:
        return YearResult(yr, failure=FailureKind.MISSING_COLUMNS, message=str(exc))
    except Exception as exc:
        # Conversion errors, parser errors, corrupt archives, bad encodings.
        return YearResult(yr, failure=FailureKind.UNREADABLE, message=str(exc))

    table = pd.DataFrame({
        MONTH_COL: pd.to_numeric(df[MONTH], errors="coerce").astype("Int64"),
        YEAR_COL: pd.to_numeric(df[YEAR], errors="coerce").astype("Int64"),
    })
    return YearResult(yr, table=table)
