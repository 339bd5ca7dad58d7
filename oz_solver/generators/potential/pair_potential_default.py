import numpy as np
from oz_solver.generators.potential.pair_potential_registry import (
    register_pair_potential
)


def _core(r, sigma):
    v = np.zeros_like(r)
    v[r < sigma] = np.inf
    return v


def pair_potential_default():
    # ------------------------------------------------------------
    # HARD SPHERE
    # ------------------------------------------------------------
    def hard_sphere(p):
        sigma = p.get("sigma", 1.0)
        def V(r):
            r = np.asarray(r, dtype=float)
            return _core(r, sigma)
        return V

    register_pair_potential(1, "hard_sphere", hard_sphere, overwrite=True)


    # ------------------------------------------------------------
    # SQUARE WELL
    # ------------------------------------------------------------
    def square_well(p):
        sigma = p.get("sigma", 1.0)
        temperature = p.get("temperature", 1.0)
        lambda_a = p.get("lambda_a", 1.5)
        def V(r):
            r = np.asarray(r, dtype=float)
            v = _core(r, sigma)
            v[(r >= sigma) & (r < lambda_a * sigma)] = -1.0 / temperature
            return v
        return V

    register_pair_potential(2, "square_well", square_well, overwrite=True)


    # ------------------------------------------------------------
    # HARD CORE + ATTRACTIVE YUKAWA
    # ------------------------------------------------------------
    def hard_core_yukawa(p):
        sigma = p.get("sigma", 1.0)
        temperature = p.get("temperature", 1.0)
        lambda_a = p.get("lambda_a", 1.0)
        def V(r):
            r = np.asarray(r, dtype=float)
            v = _core(r, sigma)
            out = r >= sigma
            x = r[out] / sigma
            v[out] = -np.exp(-lambda_a * (x - 1.0)) / (temperature * x)
            return v
        return V

    register_pair_potential(3, "hard_core_yukawa", hard_core_yukawa, overwrite=True)


    # ============================================================
    # DOUBLE YUKAWA: short range attraction, long range repulsion
    # ============================================================
    def double_yukawa(p):
        sigma = p.get("sigma", 1.0)
        temperature = p.get("temperature", 1.0)
        temperature2 = p.get("temperature2", 1.0)
        lambda_a = p.get("lambda_a", 1.0)
        lambda_r = p.get("lambda_r", 1.0)
        def V(r):
            r = np.asarray(r, dtype=float)
            v = _core(r, sigma)
            out = r >= sigma
            x = r[out] / sigma
            v[out] = (
                -np.exp(-lambda_a * (x - 1.0)) / temperature
                + np.exp(-lambda_r * (x - 1.0)) / temperature2
            ) / x
            return v
        return V

    register_pair_potential(4, "double_yukawa", double_yukawa, overwrite=True)


    # ============================================================
    # SOFT SPHERE (inverse power, exponent xnu)
    # ============================================================
    def soft_sphere(p):
        sigma = p.get("sigma", 1.0)
        temperature = p.get("temperature", 1.0)
        xnu = p.get("xnu", 14.0)
        def V(r):
            r = np.asarray(r, dtype=float)
            return (sigma / r) ** xnu / temperature
        return V

    register_pair_potential(5, "soft_sphere", soft_sphere, overwrite=True)
