"""
FARS Coordinate Handling (Functional Core)

Pure functions only.  State filtering, sentinel removal and bounding-box
computation for accident locations.

Package Location: src/fars/analysis/coordinates.py

Sentinel Rule:
    FARS encodes an unknown location with out-of-range placeholder values
    (e.g. ``LONGITUD == 999.9999``, ``LATITUDE == 99.9999``).  Any
    longitude above 900 or latitude above 90 is treated as missing and
    replaced by NaN before anything is plotted or measured.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pandas as pd

from ..data.records import LATITUDE, LONGITUDE, STATE, require_columns

LONGITUDE_SENTINEL: float = 900.0
LATITUDE_SENTINEL: float = 90.0

Bounds = Tuple[Tuple[float, float], Tuple[float, float]]


def filter_state(df: pd.DataFrame, state: int) -> pd.DataFrame:
    """Return the rows of *df* whose ``STATE`` equals *state*."""
    require_columns(df, [STATE])
    return df.loc[df[STATE] == state].copy()


def sanitize_coordinates(df: pd.DataFrame) -> pd.DataFrame:
    """
    Replace sentinel coordinates with NaN.

    Args:
        df: Table with ``LATITUDE`` and ``LONGITUD`` columns.

    Returns:
        A copy of *df* with both columns as float; values above the
        sentinel thresholds are NaN.  Each column is cleaned on its own,
        so a row may keep a valid latitude with a missing longitude.
    """
    require_columns(df, [LATITUDE, LONGITUDE])
    out = df.copy()
    lon = pd.to_numeric(out[LONGITUDE], errors="coerce").astype(float)
    lat = pd.to_numeric(out[LATITUDE], errors="coerce").astype(float)
    out[LONGITUDE] = lon.mask(lon > LONGITUDE_SENTINEL, np.nan)
    out[LATITUDE] = lat.mask(lat > LATITUDE_SENTINEL, np.nan)
    return out


def valid_points(df: pd.DataFrame) -> pd.DataFrame:
    """Rows of a sanitized table that have both a latitude and a longitude."""
    return df.dropna(subset=[LATITUDE, LONGITUDE])


def coordinate_bounds(df: pd.DataFrame) -> Optional[Bounds]:
    """
    Bounding range of the valid (latitude, longitude) pairs.

    Args:
        df: Sanitized table (see ``sanitize_coordinates``).

    Returns:
        ``((lat_min, lat_max), (lon_min, lon_max))`` or ``None`` when no
        row has a complete pair.
    """
    points = valid_points(df)
    if points.empty:
        return None
    return (
        (float(points[LATITUDE].min()), float(points[LATITUDE].max())),
        (float(points[LONGITUDE].min()), float(points[LONGITUDE].max())),
    )
