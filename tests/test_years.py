import logging

import pandas as pd

from fars.data.reader import ReadOptions
from fars.data.years import FailureKind, YearBatch, aggregate_years


def test_partial_failure_keeps_order_and_warns_once(fars_data, caplog):
    caplog.set_level(logging.WARNING, logger="fars")

    batch = aggregate_years([2015, 9999])

    assert isinstance(batch, YearBatch)
    assert len(batch) == 2
    present, absent = batch.tables
    assert list(present.columns) == ["month", "year"]
    assert len(present) == 18
    assert absent is None

    assert len(batch.warnings) == 1
    assert "9999" in batch.warnings[0]
    warnings_logged = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings_logged) == 1
    assert warnings_logged[0].year == "9999"


def test_failure_kinds_are_distinguished(fars_data):
    batch = aggregate_years([9999, 2016, 2017, "abc"])

    kinds = [r.failure for r in batch.results]
    assert kinds == [
        FailureKind.NOT_FOUND,
        FailureKind.MISSING_COLUMNS,
        FailureKind.UNREADABLE,
        FailureKind.UNREADABLE,
    ]
    assert "MONTH" in batch.results[1].message
    assert batch.tables == [None, None, None, None]
    assert len(batch.warnings) == 4
    assert batch.loaded_years == []


def test_scalar_year_gives_single_result(fars_data):
    batch = aggregate_years(2013)
    assert len(batch) == 1
    assert batch.results[0].ok
    assert batch.warnings == []


def test_projection_matches_source_months(fars_data):
    table = aggregate_years([2013]).tables[0]
    source = fars_data.frames[2013]
    assert table["month"].tolist() == source["MONTH"].tolist()
    assert set(table["year"]) == {2013}


def test_results_follow_input_order(fars_data):
    batch = aggregate_years([2015, 2013, 2014])
    assert batch.loaded_years == [2015, 2013, 2014]
    assert [len(t) for t in batch.tables] == [18, 78, 22]


def test_data_dir_option(fars_data, tmp_path_factory, monkeypatch):
    monkeypatch.chdir(tmp_path_factory.mktemp("elsewhere"))
    assert aggregate_years([2015]).failed_years == [2015]

    batch = aggregate_years([2015], ReadOptions(data_dir=fars_data.dir))
    assert batch.loaded_years == [2015]


def test_repeated_calls_are_identical(fars_data):
    first = aggregate_years([2013, 2014]).tables
    second = aggregate_years([2013, 2014]).tables
    for a, b in zip(first, second):
        pd.testing.assert_frame_equal(a, b)
