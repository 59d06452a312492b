"""
FARS Data Package (Imperative Shell)

This package handles all file I/O for the FARS tools.

Modules:
- reader:  Filename building and (compressed) csv loading
- records: Column names, schema checks and the typed AccidentRecord
- years:   Per-year batch loading and the monthly summary entry point
"""

from .reader import (
    ReadOptions,
    TableNotFoundError,
    build_filename,
    load_table,
    load_year,
)
from .records import (
    AccidentRecord,
    SchemaError,
    require_columns,
    to_records,
)
from .years import (
    FailureKind,
    YearBatch,
    YearResult,
    aggregate_years,
    summarize_years,
)

__all__ = [
    # Reader
    'ReadOptions',
    'TableNotFoundError',
    'build_filename',
    'load_table',
    'load_year',
    # Records
    'AccidentRecord',
    'SchemaError',
    'require_columns',
    'to_records',
    # Years
    'FailureKind',
    'YearBatch',
    'YearResult',
    'aggregate_years',
    'summarize_years',
]
