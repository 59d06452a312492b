"""
FARS Report Generator (Imperative Shell)

Thin orchestration layer: loads a year's accident file through
data/reader.py, narrows it with the Functional Core
(analysis/coordinates.py), builds figures with plotting/state_map.py and
renders or writes them.

Package Location: src/fars/reports/generators.py

Usage::

    from pathlib import Path
    from fars.data import ReadOptions
    from fars.reports.generators import ReportGenerator, map_state

    map_state(8, 2015)                       # opens the figure
    map_state(8, 2015, output_path=Path("colorado_2015.html"))

    gen = ReportGenerator(
        output_dir=Path("reports"),
        options=ReadOptions(data_dir=Path("data")),
    )
    gen.monthly_summary(range(2013, 2016))
    gen.state_map(8, 2015)
    # Writes:
    #   reports/monthly_summary_2013_2015.csv
    #   reports/state_08_2015.html
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import plotly.graph_objects as go

from ..analysis.coordinates import filter_state, sanitize_coordinates, valid_points
from ..analysis.summary import total_cases
from ..data.reader import ReadOptions, as_year_list, coerce_year, load_year
from ..data.records import STATE, require_columns, to_records
from ..data.years import summarize_years
from ..plotting.state_map import plot_state_map

logger = logging.getLogger(__name__)


class InvalidStateError(ValueError):
    """Raised when a state code does not occur in the year's data."""

    def __init__(self, state: int) -> None:
        self.state = state
        super().__init__(f"invalid STATE number: {state}")


# ---------------------------------------------------------------------------
# State map
# ---------------------------------------------------------------------------

def build_state_map(
    state_num,
    year,
    options: Optional[ReadOptions] = None,
) -> Optional[go.Figure]:
    """
    Load one year and build the accident map for a single state.

    Args:
        state_num: State code as ``int`` or int-coercible value.
        year: Data year as ``int`` or int-coercible value.
        options: Loader configuration.

    Returns:
        The figure, or ``None`` when the state has nothing to plot (no
        rows, or no row with a usable location).

    Raises:
        TypeError: If *state_num* or *year* is not int-coercible.
        TableNotFoundError: If the year's file does not exist.
        InvalidStateError: If *state_num* is not present in the data.
    """
    year = coerce_year(year)
    df = load_year(year, options)
    state = _coerce_state(state_num)

    require_columns(df, [STATE])
    if state not in set(df[STATE].dropna().astype(int).unique()):
        raise InvalidStateError(state)

    df_state = filter_state(df, state)
    if df_state.empty:
        logger.info("no accidents to plot", extra={"state": state, "year": year})
        return None

    df_state = sanitize_coordinates(df_state)
    located = valid_points(df_state)
    if located.empty:
        logger.info(
            "no accidents to plot",
            extra={"state": state, "year": year, "rows": len(df_state)},
        )
        return None

    dropped = len(df_state) - len(located)
    if dropped:
        logger.debug(
            f"Skipping {dropped} accident(s) without a usable location",
            extra={"state": state, "year": year},
        )

    return plot_state_map(to_records(located), state=state, year=year)


def map_state(
    state_num,
    year,
    options: Optional[ReadOptions] = None,
    output_path: Optional[Union[str, Path]] = None,
) -> None:
    """
    Draw a map of the accidents in one state for one year.

    Accidents with a missing (sentinel) latitude or longitude are left off
    the map.  When the state has nothing to plot a message is logged and
    nothing is rendered.

    Args:
        state_num: State code (e.g. ``8`` for Colorado).
        year: Data year.
        options: Loader configuration.
        output_path: When given, the figure is written there as HTML;
            otherwise it is shown with ``fig.show()``.

    Raises:
        TypeError: If *state_num* or *year* is not int-coercible.
        TableNotFoundError: If the year's file does not exist.
        InvalidStateError: If *state_num* is not present in the data.
    """
    fig = build_state_map(state_num, year, options)
    if fig is None:
        return

    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.write_html(str(output_path))
        logger.info(f"State map saved → {output_path}")
    else:
        fig.show()


# ---------------------------------------------------------------------------
# Report generator
# ---------------------------------------------------------------------------

class ReportGenerator:
    """
    Writes FARS summary tables and state maps to an output directory.

    Responsibilities
    ----------------
    - Delegate all file reading to ``data/``.
    - Call pure analysis and plotting functions.
    - Write CSV / HTML artifacts with predictable names.

    Args:
        output_dir: Directory for report files (created on demand).
        options: Loader configuration shared by every report.
    """

    def __init__(
        self,
        output_dir: Union[str, Path],
        options: Optional[ReadOptions] = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.options = options or ReadOptions()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def monthly_summary(self, years) -> Path:
        """
        Write the monthly case counts for *years* as CSV.

        Returns:
            Path of ``monthly_summary_<first>_<last>.csv``.  Years that fail
            to load are skipped exactly as in ``summarize_years``.
        """
        year_list = [coerce_year(y) for y in as_year_list(years)]
        if not year_list:
            raise ValueError("at least one year is required")

        summary = summarize_years(year_list, self.options)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        out_path = (
            self.output_dir
            / f"monthly_summary_{min(year_list)}_{max(year_list)}.csv"
        )
        summary.to_csv(out_path, index=False)

        totals = total_cases(summary)
        logger.info(
            f"Monthly summary saved → {out_path}",
            extra={"totals": {k: int(v) for k, v in totals.items()}},
        )
        return out_path

    def state_map(self, state_num, year) -> Optional[Path]:
        """
        Write the accident map for one state and year as HTML.

        Returns:
            Path of ``state_<nn>_<year>.html``, or ``None`` when there was
            nothing to plot.

        Raises:
            InvalidStateError: If *state_num* is not in the year's data.
        """
        state = _coerce_state(state_num)
        year = coerce_year(year)

        fig = build_state_map(state, year, self.options)
        if fig is None:
            logger.info(f"State map {state}/{year}: no accidents – skipping")
            return None

        self.output_dir.mkdir(parents=True, exist_ok=True)
        out_path = self.output_dir / f"state_{state:02d}_{year}.html"
        fig.write_html(str(out_path))
        logger.info(f"State map saved → {out_path}")
        return out_path


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------

def _coerce_state(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise TypeError(f"cannot convert {value!r} to a state number") from exc
