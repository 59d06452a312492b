"""
FARS State Accident Map (Functional Core)

Pure function – no file I/O, no side effects.
Input: accident records for one state and year.
Output: plotly.graph_objects.Figure.

Package Location: src/fars/plotting/state_map.py

Map extent:
    The base map (land, coastlines, state borders) is clipped to the
    bounding range of the plotted points, so a single state fills the
    frame.  A point-sized extent is widened by ``_MIN_SPAN_DEG`` so the
    map never collapses to zero width.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import plotly.graph_objects as go

from ..data.records import AccidentRecord

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_MIN_SPAN_DEG: float = 0.5

_MARKER_STYLE: Dict[str, Any] = {
    'color': 'black',
    'size': 3,
    'symbol': 'circle',
    'opacity': 0.8,
}

_GEO_STYLE: Dict[str, Any] = {
    'projection_type': 'mercator',
    'showland': True,
    'landcolor': 'rgb(243, 243, 243)',
    'showsubunits': True,
    'subunitcolor': 'rgb(120, 120, 120)',
    'showcountries': True,
    'countrycolor': 'rgb(120, 120, 120)',
    'showlakes': True,
    'lakecolor': 'white',
    'resolution': 50,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def plot_state_map(
    records: Sequence[AccidentRecord],
    state: int,
    year: int,
    title: Optional[str] = None,
) -> go.Figure:
    """
    Build a scatter map of accident locations.

    Records without a complete (latitude, longitude) pair are skipped.

    Args:
        records: Accident records, normally already filtered to *state*
            and passed through ``sanitize_coordinates``.
        state: State code, used for the title.
        year: Data year, used for the title.
        title: Overrides the default ``"Accidents in state N, YYYY (K located)"``.

    Returns:
        Figure with a single ``Scattergeo`` trace holding one marker per
        located record, and the geo axes ranged to those markers.

    Raises:
        ValueError: If no record has a location.
    """
    located = [r for r in records if r.has_location]
    if not located:
        raise ValueError(f"no located accidents for state {state} in {year}")

    lons: List[float] = [r.longitude for r in located]
    lats: List[float] = [r.latitude for r in located]

    fig = go.Figure(go.Scattergeo(
        lon=lons,
        lat=lats,
        mode='markers',
        marker=_MARKER_STYLE,
        name='Accident',
        showlegend=False,
        customdata=[[r.month] for r in located],
        hovertemplate=(
            'Lat %{lat:.4f}<br>'
            'Lon %{lon:.4f}<br>'
            'Month %{customdata[0]}'
            '<extra></extra>'
        ),
    ))

    lat_range = _padded_range(min(lats), max(lats))
    lon_range = _padded_range(min(lons), max(lons))

    fig.update_geos(
        lataxis_range=list(lat_range),
        lonaxis_range=list(lon_range),
        **_GEO_STYLE,
    )
    fig.update_layout(
        title=title or f"Accidents in state {state}, {year} ({len(located)} located)",
        margin=dict(l=10, r=10, t=50, b=10),
    )
    return fig


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _padded_range(lo: float, hi: float) -> Tuple[float, float]:
    if hi - lo < _MIN_SPAN_DEG:
        mid = (lo + hi) / 2.0
        return mid - _MIN_SPAN_DEG / 2.0, mid + _MIN_SPAN_DEG / 2.0
    return lo, hi
