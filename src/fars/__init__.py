"""
FARS - Fatality Analysis Reporting System tools

A small Python package for reading annual FARS accident files, counting
cases by month and year, and mapping accident locations for a state,
using the Functional Core, Imperative Shell architecture.

Structure:
- data/     : Imperative Shell (file loading, record schema, year batches)
- analysis/ : Functional Core (pure transformations)
- plotting/ : (plotting functions)
- reports/  : (state maps, report files)
"""

from .data import (
    build_filename,
    load_table,
    aggregate_years,
    summarize_years,
    ReadOptions,
)
from .reports import map_state

__version__ = "0.1.0"

__all__ = [
    'build_filename',
    'load_table',
    'aggregate_years',
    'summarize_years',
    'map_state',
    'ReadOptions',
]
