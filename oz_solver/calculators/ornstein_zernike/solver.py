# oz_solver/calculators/ornstein_zernike/solver.py

from dataclasses import dataclass

import numpy as np

from oz_solver.exceptions import SolverNonConvergence
from oz_solver.generators.potential import pair_potential_matrix
from oz_solver.generators.species import number_density
from oz_solver.utils import get_logger

from .closure import closure_update_c_matrix
from .registry import closure_name
from .transforms import (
    radial_grid,
    hankel_transform_matrix_fast,
    inverse_hankel_transform_matrix_fast,
)


@dataclass(frozen=True)
class NativeSeries:
    """(abscissa, ordinate) pairs on the solver's native grid."""

    x: np.ndarray
    y: np.ndarray

    def __len__(self):
        return len(self.x)


@dataclass(frozen=True)
class SolverResult:
    fourier_transform: NativeSeries
    structure_factor: NativeSeries
    radial_distribution: NativeSeries


# -----------------------------
# Closures and OZ solver
# -----------------------------

def solve_oz_matrix(c_r_matrix, r, densities, eps_reg=1e-12):
    """
    gamma(k) = [I - C(k) rho]^{-1} C(k) rho C(k), solved for all k at once.
    """
    N = c_r_matrix.shape[0]
    c_k_matrix, k = hankel_transform_matrix_fast(c_r_matrix, r)

    Ck = np.moveaxis(c_k_matrix, -1, 0)          # (Nk, N, N)
    rho_matrix = np.diag(densities)
    I = np.identity(N)

    num = Ck @ rho_matrix @ Ck
    A = I - Ck @ rho_matrix + eps_reg * I
    gamma_k_matrix = np.moveaxis(np.linalg.solve(A, num), 0, -1)

    gamma_r_matrix = inverse_hankel_transform_matrix_fast(gamma_k_matrix, k, r)
    return gamma_r_matrix


class OrnsteinZernikeSolver:
    """
    Picard solver for the two-component Ornstein-Zernike equation.

    The target density is reached by continuation over ``nrho`` steps, each
    warm started from the previous solution. Within a step the indirect
    correlation gamma(r) is mixed adaptively: the mixing grows by 5% while
    the residual drops and is halved when it rises.

    Parameters
    ----------
    mole_fractions : tuple of float
        (x1, x2) of the two species.
    xnu : float
        Exponent handed to the potential table.
    max_iterations : int
        Picard iterations per density step.
    mixing_max : float
        Upper bound of the mixing parameter.
    divergence_limit : float
        Residual above which a density step is abandoned as divergent.
    max_growth_steps : int
        Consecutive growing residuals after which a density step is abandoned.
    verbose : bool
        Print the iteration table.
    exporter : callable, optional
        Called as ``exporter(run_label, payload)`` after a successful solve.
    """

    def __init__(
        self,
        mole_fractions=(1.0, 0.0),
        xnu=14.0,
        max_iterations=10000,
        mixing_max=0.5,
        verbose=False,
        exporter=None,
        divergence_limit=1e8,
        max_growth_steps=200,
    ):
        self.mole_fractions = np.asarray(mole_fractions, dtype=float)
        self.xnu = xnu
        self.max_iterations = max_iterations
        self.mixing_max = mixing_max
        self.divergence_limit = divergence_limit
        self.max_growth_steps = max_growth_steps
        self.verbose = verbose
        self.exporter = exporter
        # one logger per verbosity; its level is fixed when first created
        channel = "verbose" if verbose else "quiet"
        self.logger = get_logger(
            f"{__name__}.{self.__class__.__name__}.{channel}", verbose=verbose
        )

    @classmethod
    def from_config(cls, config, exporter=None):
        return cls(
            mole_fractions=config.mole_fractions,
            xnu=config.xnu,
            max_iterations=config.max_iterations,
            mixing_max=config.mixing_max,
            verbose=config.verbose,
            exporter=exporter,
        )

    def _iterate(self, r, closure, u_matrix, densities, gamma_r, alpha, tol):
        """Converge gamma(r) at fixed densities; returns (gamma_r, iterations)."""
        prev_diff = np.inf
        mix = 0.2 * self.mixing_max
        mix_floor = min(1e-2, self.mixing_max)
        growing = 0

        for step in range(self.max_iterations):

            c_r = closure_update_c_matrix(gamma_r, r, closure, u_matrix, alpha=alpha)
            gamma_new = solve_oz_matrix(c_r, r, densities)

            diff = np.max(np.abs(gamma_new - gamma_r))
            if not np.isfinite(diff) or diff > self.divergence_limit:
                raise SolverNonConvergence(closure, densities.sum(), step + 1, diff)

            # --- Adaptive mixing
            if diff < prev_diff:
                mix = min(mix * 1.05, self.mixing_max)
                growing = 0
            else:
                mix = max(mix * 0.5, mix_floor)
                growing += 1
                if growing >= self.max_growth_steps:
                    raise SolverNonConvergence(closure, densities.sum(), step + 1, diff)

            gamma_r = (1 - mix) * gamma_r + mix * gamma_new

            if self.verbose and (step % 10 == 0 or diff < tol):
                print(f"{step:6d} | {diff:12.3e} | {mix:6.4f}")

            if diff < tol:
                return gamma_r, step + 1

            prev_diff = diff

        raise SolverNonConvergence(closure, densities.sum(), self.max_iterations, diff)

    def solve(self, nodes, nrho, rmax, pair, state, output_flag=0, run_label=""):
        """
        Solve the OZ equation and return the three native-grid series.

        Parameters
        ----------
        nodes : int
            Native grid size; every returned series has this many points.
        nrho : int
            Density continuation steps.
        rmax : float
            Real-space extent of the native grid.
        pair : (Species, Species)
            Species description from ``build_pair``.
        state : PhysicalState
            Packing fraction, length scale, closure and potential ids.
        output_flag : int
            Requested output kind, recorded with the diagnostics.
        run_label : str
            Opaque run identifier.

        Returns
        -------
        SolverResult

        Raises
        ------
        SolverNonConvergence
            No partial result is returned.
        """
        closure = closure_name(state.closure_id)
        x = self.mole_fractions
        r, k = radial_grid(nodes, rmax)

        u_matrix, sigma_matrix = pair_potential_matrix(
            r, state.potential_id, pair, state.diameter_scale, self.xnu
        )
        rho = number_density(state.volume_factor, pair, x, state.diameter_scale)

        self.logger.info(
            f"[{run_label}] {closure} closure, potential {state.potential_id}, "
            f"phi={state.volume_factor}, rho={rho:.6g}, nodes={nodes}, rmax={rmax}"
        )
        if self.verbose:
            print(f"{'Iter':>6s} | {'max |dgamma|':>12s} | {'mix':>6s}")

        n_species = len(pair)
        gamma_r = np.zeros((n_species, n_species, nodes))
        total_iterations = 0

        for step in range(1, nrho + 1):
            densities = rho * x * step / nrho
            try:
                gamma_r, n_iter = self._iterate(
                    r, closure, u_matrix, densities, gamma_r, state.alpha, state.tolerance
                )
            except SolverNonConvergence as exc:
                self.logger.error(f"[{run_label}] {exc}")
                raise
            total_iterations += n_iter

        self.logger.info(f"[{run_label}] converged after {total_iterations} iterations")

        # -----------------------------
        # Final observables
        # -----------------------------
        densities = rho * x
        c_r = closure_update_c_matrix(gamma_r, r, closure, u_matrix, alpha=state.alpha)
        h_r = gamma_r + c_r
        c_k, _ = hankel_transform_matrix_fast(c_r, r)
        h_k, _ = hankel_transform_matrix_fast(h_r, r)

        weights = np.outer(x, x)[:, :, None]
        c_k_mix = np.sum(weights * c_k, axis=(0, 1))
        s_k = 1.0 + rho * np.sum(weights * h_k, axis=(0, 1))
        g_r = 1.0 + np.sum(weights * h_r, axis=(0, 1))

        result = SolverResult(
            fourier_transform=NativeSeries(k.copy(), c_k_mix),
            structure_factor=NativeSeries(k.copy(), s_k),
            radial_distribution=NativeSeries(r.copy(), g_r),
        )

        if self.exporter is not None:
            self.exporter(run_label, {
                "metadata": {
                    "closure": closure,
                    "potential_id": int(state.potential_id),
                    "volume_factor": float(state.volume_factor),
                    "density": float(rho),
                    "mole_fractions": x.tolist(),
                    "alpha": float(state.alpha),
                    "tolerance": float(state.tolerance),
                    "nodes": int(nodes),
                    "nrho": int(nrho),
                    "rmax": float(rmax),
                    "output_flag": int(output_flag),
                    "iterations": int(total_iterations),
                    "sigma": sigma_matrix.tolist(),
                },
                "r": r,
                "k": k,
                "g_r": g_r,
                "c_r": np.sum(weights * c_r, axis=(0, 1)),
                "c_k": c_k_mix,
                "s_k": s_k,
                "u_r": u_matrix[0, 0],
            })

        return result
