from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Dict, List, Tuple

import pandas as pd
import pytest

# (state, month, latitude, longitude)
Row = Tuple[int, int, float, float]


def _rows_2013() -> List[Row]:
    # month m has m accidents -> 78 rows
    return [
        (1 if i % 2 else 8, m, 39.0 + i * 0.01, -105.0 - i * 0.01)
        for m in range(1, 13)
        for i in range(m)
    ]


def _rows_2014() -> List[Row]:
    # no December -> that cell stays empty in the summary
    return [(8, m, 39.5, -105.5) for m in range(1, 12) for _ in range(2)]


def _rows_2015() -> List[Row]:
    colorado = [
        (8, 1, 37.10, -108.50),
        (8, 2, 40.90, -102.10),
        (8, 3, 39.50, 999.9999),
        (8, 4, 99.9999, -104.80),
    ]
    california = [
        (6, 5, 99.9999, 999.9999),
        (6, 6, 34.05, 999.9999),
    ]
    alabama = [(1, m, 32.0 + m * 0.1, -86.0 - m * 0.1) for m in range(1, 13)]
    return colorado + california + alabama


def make_accident_frame(rows: List[Row], year: int) -> pd.DataFrame:
    return pd.DataFrame({
        "STATE": [r[0] for r in rows],
        "ST_CASE": [r[0] * 10000 + i for i, r in enumerate(rows)],
        "MONTH": [r[1] for r in rows],
        "DAY": [1 + i % 28 for i in range(len(rows))],
        "YEAR": [year] * len(rows),
        "LATITUDE": [r[2] for r in rows],
        "LONGITUD": [r[3] for r in rows],
        "FATALS": [1] * len(rows),
    })


@pytest.fixture()
def fars_data(tmp_path: Path, monkeypatch) -> SimpleNamespace:
    """Write 2013-2015 accident files plus two broken years into tmp_path.

    The working directory is switched to tmp_path so bare filenames resolve
    the way they do for a user sitting in their data folder.

    - 2016: readable but has no MONTH column
    - 2017: not a valid bz2 stream
    """
    frames: Dict[int, pd.DataFrame] = {
        2013: make_accident_frame(_rows_2013(), 2013),
        2014: make_accident_frame(_rows_2014(), 2014),
        2015: make_accident_frame(_rows_2015(), 2015),
    }
    for year, df in frames.items():
        df.to_csv(tmp_path / f"accident_{year}.csv.bz2", index=False, compression="bz2")

    frames[2015].drop(columns=["MONTH"]).assign(YEAR=2016).to_csv(
        tmp_path / "accident_2016.csv.bz2", index=False, compression="bz2"
    )
    (tmp_path / "accident_2017.csv.bz2").write_bytes(b"STATE,MONTH,YEAR\nthis is not bzip2")

    monkeypatch.chdir(tmp_path)
    return SimpleNamespace(dir=tmp_path, frames=frames)
