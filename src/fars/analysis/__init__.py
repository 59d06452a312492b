"""
FARS Analysis Package (Functional Core)

This package contains pure transformation functions with no I/O.
All functions accept DataFrames and return transformed data.

Modules:
- summary:     Monthly case counts pivoted by year
- coordinates: State filtering, sentinel removal, bounding boxes
"""

from .summary import (
    monthly_counts,
    total_cases,
)

from .coordinates import (
    filter_state,
    sanitize_coordinates,
    valid_points,
    coordinate_bounds,
)

__all__ = [
    # Summary
    'monthly_counts',
    'total_cases',
    # Coordinates
    'filter_state',
    'sanitize_coordinates',
    'valid_points',
    'coordinate_bounds',
]
