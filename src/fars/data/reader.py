"""
FARS Table Reader (Imperative Shell)

Builds canonical dataset filenames and loads annual accident files into
DataFrames.  This is the only module that touches the filesystem for
reading; everything downstream receives DataFrames.

Package Location: src/fars/data/reader.py

File format:
   One delimited text file per year, header row naming the fields, named
   ``accident_<YYYY>.csv.bz2``.  Compression is inferred from the file
   extension by pandas, so ``.gz``, ``.xz``, ``.zip`` and plain ``.csv``
   files load the same way.

Diagnostics:
   pandas may emit ``DtypeWarning`` / ``ParserWarning`` while inferring
   column types on wide FARS files.  Whether those reach the caller is an
   explicit ``ReadOptions.quiet`` setting rather than a global filter.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

_FILENAME_TEMPLATE = "accident_{year:d}.csv.bz2"

_PARSER_WARNINGS = (pd.errors.DtypeWarning, pd.errors.ParserWarning)


class TableNotFoundError(FileNotFoundError):
    """Raised when a requested data file does not exist."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        super().__init__(f"file '{self.path}' does not exist")


@dataclass(frozen=True)
class ReadOptions:
    """Explicit loader configuration passed down the call chain.

    Args:
        quiet: Suppress pandas parser diagnostics during the read.
        encoding: Text encoding handed to ``pandas.read_csv``.  ``None``
            lets pandas use its default (UTF-8).
        data_dir: Directory that built filenames are resolved against.
            ``None`` means the current working directory.
    """

    quiet: bool = True
    encoding: Optional[str] = None
    data_dir: Optional[Path] = None

    def resolve(self, filename: str) -> Path:
        """Return *filename* resolved against ``data_dir``."""
        if self.data_dir is None:
            return Path(filename)
        return Path(self.data_dir) / filename


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_filename(year):
    """
    Construct the canonical filename for one or more FARS years.

    Args:
        year: A year as ``int`` or anything ``int()`` accepts (e.g. the
            string ``"2013"``).  A non-string iterable of years (list,
            tuple, ``range``, numpy array, Series) is handled element-wise.

    Returns:
        ``"accident_<year>.csv.bz2"`` for a scalar, or a list of such
        names in input order for an iterable.

    Raises:
        TypeError: If a year cannot be converted to an integer.

    Example::

        build_filename(2013)              # 'accident_2013.csv.bz2'
        build_filename(range(2013, 2015)) # ['accident_2013.csv.bz2',
                                          #  'accident_2014.csv.bz2']
    """
    if _is_sequence(year):
        return [_FILENAME_TEMPLATE.format(year=coerce_year(y)) for y in year]
    return _FILENAME_TEMPLATE.format(year=coerce_year(year))


def load_table(
    path: Union[str, Path],
    options: Optional[ReadOptions] = None,
) -> pd.DataFrame:
    """
    Read a (possibly compressed) FARS csv file into a DataFrame.

    Column types are inferred by pandas.  The file is opened read-only and
    released as soon as parsing finishes or fails.

    Args:
        path: Path to the file.  Used as given; ``options.data_dir`` is
            not applied here (see ``load_year``).
        options: Loader configuration.  Defaults to ``ReadOptions()``.

    Returns:
        DataFrame with one row per data row in the file.

    Raises:
        TableNotFoundError: If *path* is not an existing regular file.
        pandas.errors.ParserError: If the content cannot be parsed.
    """
    options = options or ReadOptions()
    path = Path(path)
    if not path.is_file():
        raise TableNotFoundError(path)

    with warnings.catch_warnings():
        if options.quiet:
            for category in _PARSER_WARNINGS:
                warnings.simplefilter("ignore", category)
        df = pd.read_csv(
            path,
            compression="infer",
            encoding=options.encoding,
        )

    logger.debug(
        f"Loaded {len(df)} rows from {path.name}",
        extra={"path": str(path), "rows": len(df)},
    )
    return df


def load_year(year, options: Optional[ReadOptions] = None) -> pd.DataFrame:
    """Build the filename for *year*, resolve it and load it.

    Raises:
        TypeError: If *year* is not int-coercible.
        TableNotFoundError: If the year's file is missing.
    """
    options = options or ReadOptions()
    return load_table(options.resolve(build_filename(year)), options)


def coerce_year(value) -> int:
    """
    Convert *value* to an ``int`` year.

    Raises:
        TypeError: If the conversion fails.  ``ValueError`` from ``int()``
            is re-raised as ``TypeError`` so callers see one error kind.
    """
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise TypeError(f"cannot convert {value!r} to an integer year") from exc


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _is_sequence(value) -> bool:
    if isinstance(value, (str, bytes)):
        return False
    # 0-d numpy arrays are Iterable but cannot be iterated
    if getattr(value, "ndim", None) == 0:
        return False
    return isinstance(value, Iterable)


def as_year_list(years) -> List:
    """Normalise a scalar or iterable of years to a plain list (unconverted)."""
    if _is_sequence(years):
        return list(years)
    return [years]
