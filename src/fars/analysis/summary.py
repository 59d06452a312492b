"""
FARS Monthly Summary (Functional Core)

Pure functions only. No I/O, no side effects.
Input is a sequence of month/year tables (``None`` for years that failed to
load); output is a wide DataFrame with one row per calendar month and one
column per year.

Package Location: src/fars/analysis/summary.py

Output shape:
    month | 2013 | 2014 | ...
    ------+------+------+----
      1   | 2230 | 2168 | ...
     ...
     12   | 2365 | 2457 | ...

    ``month`` always holds 1-12 in order.  Year columns are named with the
    year as a string and sorted ascending.  Counts are nullable ``Int64``;
    a month with no cases in a year is ``<NA>``, not 0.
"""

from __future__ import annotations

from typing import Iterable, Optional

import pandas as pd

MONTHS = list(range(1, 13))

MONTH_COL: str = "month"
YEAR_COL: str = "year"


def monthly_counts(frames: Iterable[Optional[pd.DataFrame]]) -> pd.DataFrame:
    """
    Count cases per (year, month) and pivot years into columns.

    Args:
        frames: Month/year tables with columns ``month`` and ``year``.
            ``None`` entries contribute nothing.

    Returns:
        DataFrame with a ``month`` column (1-12) followed by one ``Int64``
        column per distinct year.  When no rows are supplied the result
        has only the ``month`` column.
    """
    present = [f for f in frames if f is not None and not f.empty]
    if not present:
        return pd.DataFrame({MONTH_COL: MONTHS})

    combined = pd.concat(
        [f[[MONTH_COL, YEAR_COL]] for f in present], ignore_index=True
    )
    combined = combined.dropna(subset=[MONTH_COL, YEAR_COL]).astype("int64")

    counts = combined.groupby([YEAR_COL, MONTH_COL]).size()
    if counts.empty:
        return pd.DataFrame({MONTH_COL: MONTHS})

    wide = counts.unstack(YEAR_COL)
    wide = wide.reindex(
        index=pd.Index(MONTHS, name=MONTH_COL),
        columns=sorted(wide.columns),
    )
    wide.columns = [str(int(y)) for y in wide.columns]
    wide = wide.astype("Int64")

    return wide.reset_index()


def total_cases(summary: pd.DataFrame) -> pd.Series:
    """Per-year totals of a ``monthly_counts`` table, indexed by year label."""
    year_cols = [c for c in summary.columns if c != MONTH_COL]
    return summary[year_cols].sum(skipna=True).astype("int64")
