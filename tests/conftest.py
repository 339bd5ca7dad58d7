"""Shared fixtures: a synthetic solver standing in for the OZ iteration."""

import numpy as np
import pytest

from oz_solver.calculators.ornstein_zernike import NativeSeries, SolverResult
from oz_solver.config import SolverConfig


class SyntheticSolver:
    """
    Deterministic solver with the ``OrnsteinZernikeSolver.solve`` signature.

    Returns smooth series on k in [0, 20] and r in [0, 10]; records every call.
    """

    def __init__(self, s_k=None, error=None):
        self.calls = []
        self.s_k = s_k
        self.error = error

    def solve(self, nodes, nrho, rmax, pair, state, output_flag=0, run_label=""):
        self.calls.append(
            dict(nodes=nodes, nrho=nrho, rmax=rmax, pair=pair, state=state,
                 output_flag=output_flag, run_label=run_label)
        )
        if self.error is not None:
            raise self.error

        k = np.linspace(0.0, 20.0, nodes)
        r = np.linspace(0.0, 10.0, nodes)
        s_k = self.s_k(k) if self.s_k is not None else 1.0 - 0.5 * np.exp(-((k - 7.0) ** 2))
        return SolverResult(
            fourier_transform=NativeSeries(k, -np.exp(-k / 3.0)),
            structure_factor=NativeSeries(k, s_k),
            radial_distribution=NativeSeries(r, 1.0 + np.exp(-r) * np.cos(2 * r)),
        )


@pytest.fixture
def synthetic_solver():
    return SyntheticSolver()


@pytest.fixture
def small_config(tmp_path):
    """
    Configuration small enough for the real solver to finish in seconds.

    Returns
    -------
    SolverConfig
        Output directory created under ``tmp_path``.
    """
    out = tmp_path / "output"
    out.mkdir()
    return SolverConfig(nrho=5, rmax=40.0, output_dir=out)
