# oz_solver/calculators/ornstein_zernike/builtin.py

import numpy as np
from oz_solver.utils import safe_exp


def hnc_closure(r, gamma, u, alpha=None):
    """
    Hypernetted chain closure, c(r) = exp(-u + gamma) - 1 - gamma.
    """
    return safe_exp(-u + gamma) - gamma - 1.0


def rogers_young_closure(r, gamma, u, alpha=1.0):
    """
    Rogers-Young closure.

    Interpolates between Percus-Yevick (alpha -> 0) and HNC (alpha -> inf)
    through the mixing function f(r) = 1 - exp(-alpha r):

        g(r) = exp(-u) [1 + (exp(f gamma) - 1) / f]

    Parameters
    ----------
    r : ndarray
        Distance array
    gamma : ndarray
        Current gamma(r)
    u : ndarray
        Reduced pair potential beta*u(r)
    alpha : float
        Mixing parameter

    Returns
    -------
    c_r : ndarray
        Direct correlation function c(r)
    """
    f = -np.expm1(-alpha * np.asarray(r, dtype=float))

    # (exp(f gamma) - 1) / f -> gamma as f -> 0
    small = np.abs(f) < 1e-12
    f_safe = np.where(small, 1.0, f)
    bridge = np.where(small, gamma, np.expm1(np.clip(f_safe * gamma, -50.0, 50.0)) / f_safe)

    g = safe_exp(-u) * (1.0 + bridge)
    return g - 1.0 - gamma
