"""Tests for the result sinks."""

import logging

import numpy as np
import pytest

from oz_solver.calculators.ornstein_zernike import NativeSeries
from oz_solver.engines.persistence import FileSink, MemorySink, write_series
from oz_solver.exceptions import PersistenceFailure


@pytest.fixture
def series():
    x = np.linspace(0.1, 3.0, 25)
    return NativeSeries(x, 1.0 / 3.0 + np.sin(x))


def test_file_format(tmp_path, series):
    """One line per point, two tab-separated fields with 17 decimals, no header."""
    path = write_series(tmp_path / "HNC_SdeK.dat", series)
    lines = path.read_text().splitlines()
    assert len(lines) == len(series)
    for line, xi, yi in zip(lines, series.x, series.y):
        fields = line.split("\t")
        assert len(fields) == 2
        assert len(fields[0].split(".")[1]) == 17
        assert float(fields[0]) == pytest.approx(xi, rel=1e-15)
        assert float(fields[1]) == pytest.approx(yi, rel=1e-15)


def test_fallback_when_primary_unwritable(tmp_path, series):
    reference = write_series(tmp_path / "reference.dat", series)
    fallback_dir = tmp_path / "cwd"
    fallback_dir.mkdir()

    sink = FileSink(output_dir=tmp_path / "missing", fallback_dir=fallback_dir)
    written = sink.write("RY_GdeR.dat", series)

    assert written == fallback_dir / "RY_GdeR.dat"
    assert not (tmp_path / "missing").exists()
    assert written.read_bytes() == reference.read_bytes()


def test_default_fallback_is_working_directory(tmp_path, monkeypatch, series):
    monkeypatch.chdir(tmp_path)
    FileSink(output_dir=tmp_path / "missing").write("HNC_CdeK.dat", series)
    assert (tmp_path / "HNC_CdeK.dat").exists()


def test_primary_path_preferred(tmp_path, series):
    out = tmp_path / "output"
    out.mkdir()
    written = FileSink(output_dir=out, fallback_dir=tmp_path).write("HNC_SdeK.dat", series)
    assert written == out / "HNC_SdeK.dat"
    assert not (tmp_path / "HNC_SdeK.dat").exists()


def test_both_paths_fail_is_logged(tmp_path, series, caplog):
    sink = FileSink(output_dir=tmp_path / "a", fallback_dir=tmp_path / "b")
    with caplog.at_level(logging.WARNING):
        assert sink.write("HNC_SdeK.dat", series) is None
    levels = [rec.levelno for rec in caplog.records]
    assert logging.WARNING in levels
    assert logging.ERROR in levels


def test_strict_raises(tmp_path, series):
    with pytest.raises(PersistenceFailure):
        write_series(tmp_path / "a" / "x.dat", series, fallback=tmp_path / "b" / "x.dat", strict=True)


def test_memory_sink(series):
    sink = MemorySink()
    sink.write("RY_SdeK.dat", series)
    assert "RY_SdeK.dat" in sink
    assert sink["RY_SdeK.dat"] is series
