import logging

import pandas as pd
import plotly.graph_objects as go
import pytest

from fars.data.reader import ReadOptions, TableNotFoundError
from fars.reports.generators import (
    InvalidStateError,
    ReportGenerator,
    build_state_map,
    map_state,
)


def test_build_state_map_drops_sentinel_coordinates(fars_data):
    fig = build_state_map(8, 2015)

    trace = fig.data[0]
    assert list(trace.lon) == [-108.5, -102.1]
    assert list(trace.lat) == [37.1, 40.9]
    assert all(lon <= 900 for lon in trace.lon)
    assert all(lat <= 90 for lat in trace.lat)
    assert tuple(fig.layout.geo.lataxis.range) == (37.1, 40.9)


def test_build_state_map_coerces_arguments(fars_data):
    fig = build_state_map("1", "2015")
    assert len(fig.data[0].lon) == 12


def test_unknown_state_is_rejected(fars_data):
    with pytest.raises(InvalidStateError) as excinfo:
        build_state_map(99, 2015)
    assert excinfo.value.state == 99
    assert "99" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)


def test_non_numeric_state(fars_data):
    with pytest.raises(TypeError):
        map_state("colorado", 2015)


def test_missing_year_file(fars_data):
    with pytest.raises(TableNotFoundError):
        map_state(8, 1999)


def test_state_without_locations_plots_nothing(fars_data, tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="fars")
    out = tmp_path / "maps" / "ca.html"

    assert build_state_map(6, 2015) is None
    assert map_state(6, 2015, output_path=out) is None

    assert not out.exists()
    assert "no accidents to plot" in caplog.messages


def test_map_state_writes_html(fars_data, tmp_path):
    out = tmp_path / "maps" / "colorado.html"
    assert map_state(8, 2015, output_path=out) is None
    assert out.exists()
    assert '"scattergeo"' in out.read_text(encoding="utf-8")


def test_map_state_shows_figure_without_output_path(fars_data, monkeypatch):
    shown = []
    monkeypatch.setattr(go.Figure, "show", lambda self, *a, **k: shown.append(self))

    map_state(8, 2015)
    map_state(6, 2015)

    assert len(shown) == 1
    assert len(shown[0].data[0].lon) == 2


def test_report_generator_monthly_summary(fars_data, tmp_path):
    gen = ReportGenerator(tmp_path / "reports")
    out = gen.monthly_summary(range(2013, 2016))

    assert out.name == "monthly_summary_2013_2015.csv"
    written = pd.read_csv(out)
    assert list(written.columns) == ["month", "2013", "2014", "2015"]
    assert len(written) == 12
    assert written["2015"].sum() == 18


def test_report_generator_monthly_summary_needs_years(fars_data, tmp_path):
    with pytest.raises(ValueError):
        ReportGenerator(tmp_path).monthly_summary([])


def test_report_generator_state_map(fars_data, tmp_path_factory, monkeypatch):
    monkeypatch.chdir(tmp_path_factory.mktemp("elsewhere"))
    out_dir = tmp_path_factory.mktemp("reports")
    gen = ReportGenerator(out_dir, ReadOptions(data_dir=fars_data.dir))

    out = gen.state_map(8, 2015)
    assert out == out_dir / "state_08_2015.html"
    assert out.exists()

    assert gen.state_map(6, 2015) is None
    assert not (out_dir / "state_06_2015.html").exists()


def test_blank_month_still_plotted(tmp_path, monkeypatch):
    pd.DataFrame({
        "STATE": [8, 8],
        "MONTH": [1, None],
        "YEAR": [2015, 2015],
        "LATITUDE": [37.1, 40.9],
        "LONGITUD": [-108.5, -102.1],
    }).to_csv(tmp_path / "accident_2015.csv.bz2", index=False, compression="bz2")
    monkeypatch.chdir(tmp_path)

    fig = build_state_map(8, 2015)

    assert list(fig.data[0].lon) == [-108.5, -102.1]
    assert list(fig.data[0].lat) == [37.1, 40.9]
