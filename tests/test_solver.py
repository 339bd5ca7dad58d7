"""
Tests that run the Ornstein-Zernike solver itself.

Small grids and few continuation steps keep each solve well under a second.
"""

import itertools
import json
import logging

import numpy as np
import pytest

import oz_solver.calculators.ornstein_zernike.solver as solver_module

from oz_solver import SolverConfig, SolverNonConvergence, radial_distribution, structure_factor
from oz_solver.calculators.ornstein_zernike import OrnsteinZernikeSolver, scratch_exporter
from oz_solver.generators.species import PhysicalState, build_pair

NODES = 1024


def _solve(closure_id, volume_factor, config, potential_id=1, exporter=None,
           run_label="test", temperature=1.0):
    pair = build_pair(1.0, 1.0, temperature, temperature, 1.5, 3.0)
    state = PhysicalState(volume_factor, 1.0, config.alpha, config.tolerance, potential_id, closure_id)
    solver = OrnsteinZernikeSolver.from_config(config, exporter=exporter)
    return solver.solve(NODES, config.nrho, config.rmax, pair, state, 0, run_label)


def test_end_to_end_structure_factor(small_config):
    """
    phi = 0.3, T1 = T2 = 1, lambda_a = 1.5, lambda_r = 3, HNC, S(k) on 50
    points in [0, 10]: 50 finite values and a native-grid file.
    """
    query = np.linspace(0.0, 10.0, 50)
    values = structure_factor("HNC", 0.3, 1.0, 1.0, 1.5, 3.0, query,
                              nodes=NODES, config=small_config)
    assert values.shape == (50,)
    assert np.all(np.isfinite(values))

    lines = (small_config.output_dir / "HNC_SdeK.dat").read_text().splitlines()
    assert len(lines) == NODES
    for line in lines:
        x, y = line.split("\t")
        float(x), float(y)


@pytest.mark.parametrize("closure_id", [2, 3])
def test_hard_sphere_structure(closure_id, small_config):
    result = _solve(closure_id, 0.3, small_config)
    r, g = result.radial_distribution.x, result.radial_distribution.y
    k, s = result.structure_factor.x, result.structure_factor.y

    assert len(r) == len(k) == NODES
    assert np.all(np.abs(g[r < 0.95]) < 1e-6)
    contact = g[np.argmax(r >= 1.0)]
    assert 1.3 < contact < 4.0
    assert abs(g[np.argmin(np.abs(r - 15.0))] - 1.0) < 1e-2
    assert s[0] < 0.5
    assert abs(s[np.argmin(np.abs(k - 30.0))] - 1.0) < 0.1


def test_structure_factor_consistent_with_direct_correlation(small_config):
    """Single component: S(k) = 1 / (1 - rho c(k))."""
    result = _solve(2, 0.2, small_config.replace(tolerance=1e-8))
    rho = 6 * 0.2 / np.pi
    c_k = result.fourier_transform.y
    np.testing.assert_allclose(result.structure_factor.y, 1.0 / (1.0 - rho * c_k), rtol=1e-3, atol=1e-3)


def test_low_density_limit(small_config):
    result = _solve(2, 5e-4, small_config.replace(nrho=1))
    r, g = result.radial_distribution.x, result.radial_distribution.y
    np.testing.assert_allclose(g[r > 1.05], 1.0, atol=1e-2)
    np.testing.assert_allclose(result.structure_factor.y, 1.0, atol=1e-2)


def test_square_well_attraction_raises_contact(small_config):
    hs = _solve(2, 0.2, small_config, potential_id=1, temperature=2.0)
    sw = _solve(2, 0.2, small_config, potential_id=2, temperature=2.0)
    r = hs.radial_distribution.x
    i = np.argmax(r >= 1.0)
    assert sw.radial_distribution.y[i] > hs.radial_distribution.y[i]


def test_non_convergence(small_config):
    with pytest.raises(SolverNonConvergence) as excinfo:
        _solve(2, 0.3, small_config.replace(max_iterations=1))
    assert excinfo.value.closure == "HNC"
    assert excinfo.value.iterations == 1


def test_verbose_prints_iteration_table(small_config, capsys):
    _solve(3, 0.1, small_config.replace(nrho=1, verbose=True))
    assert "Iter" in capsys.readouterr().out


def test_verbosity_is_per_instance():
    quiet = OrnsteinZernikeSolver(verbose=False)
    loud = OrnsteinZernikeSolver(verbose=True)
    assert quiet.logger.level == logging.WARNING
    assert loud.logger.level == logging.INFO
    assert not quiet.logger.isEnabledFor(logging.INFO)


def test_quiet_solver_logs_no_info(small_config, caplog):
    """A verbose instance created alongside does not make a quiet one chatty."""
    OrnsteinZernikeSolver(verbose=True)
    with caplog.at_level(logging.INFO):
        _solve(2, 0.1, small_config.replace(nrho=1))
    assert [rec for rec in caplog.records if rec.levelno == logging.INFO] == []

    with caplog.at_level(logging.INFO):
        _solve(2, 0.1, small_config.replace(nrho=1, verbose=True))
    assert any(rec.levelno == logging.INFO for rec in caplog.records)


def test_runaway_residual_stops_early(small_config, monkeypatch):
    """A residual past the divergence limit aborts the step at once."""
    calls = itertools.count(1)
    monkeypatch.setattr(
        solver_module, "solve_oz_matrix",
        lambda c_r, r, densities: np.full_like(c_r, 10.0 ** next(calls)),
    )
    with pytest.raises(SolverNonConvergence) as excinfo:
        _solve(2, 0.3, small_config.replace(nrho=1))
    assert excinfo.value.iterations < 12
    assert excinfo.value.residual > 1e8


def test_steadily_growing_residual_stops_early(small_config, monkeypatch):
    """Residuals that keep growing abort the step long before max_iterations."""
    calls = itertools.count(1)
    monkeypatch.setattr(
        solver_module, "solve_oz_matrix",
        lambda c_r, r, densities: np.full_like(c_r, float(next(calls))),
    )
    with pytest.raises(SolverNonConvergence) as excinfo:
        _solve(2, 0.3, small_config.replace(nrho=1))
    assert excinfo.value.iterations < 1000 < small_config.max_iterations
    assert excinfo.value.residual < 1e8


def test_scratch_export(tmp_path, small_config):
    exporter = scratch_exporter(tmp_path / "scratch", plot=True)
    _solve(2, 0.2, small_config.replace(nrho=2), exporter=exporter, run_label="5Mar2026_070809")

    run_dir = tmp_path / "scratch" / "5Mar2026_070809"
    data = json.loads((run_dir / "oz_HNC.json").read_text())
    assert data["metadata"]["closure"] == "HNC"
    assert data["metadata"]["nodes"] == NODES
    assert len(data["g_r"]) == NODES
    assert data["u_r"][0] is None
    assert len(list((run_dir / "plots").glob("*.png"))) == 3


def test_facade_exports_when_scratch_dir_set(tmp_path, small_config):
    config = small_config.replace(nrho=2, scratch_dir=tmp_path / "scratch")
    query = np.linspace(1.05, 5.0, 20)
    g = radial_distribution("RY", 0.2, 1.0, 1.0, 1.5, 3.0, query, nodes=NODES,
                            config=config, run_label="run")
    assert np.all(g > 0)
    assert (tmp_path / "scratch" / "run" / "oz_RY.json").exists()
    assert (small_config.output_dir / "RY_GdeR.dat").exists()
