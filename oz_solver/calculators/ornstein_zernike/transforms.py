# -----------------------------
# DST-based Hankel forward/inverse transforms
# -----------------------------
#
# 3D radial Fourier transforms of spherically symmetric functions on the
# grids r_i = i dr, k_j = j pi / Rmax with Rmax = (N + 1) dr, i, j = 1..N:
#
#   F(k) = (4 pi / k) int r f(r) sin(kr) dr
#   f(r) = 1 / (2 pi^2 r) int k F(k) sin(kr) dk

import numpy as np
from scipy.fftpack import dst, idst


def radial_grid(nodes, rmax):
    """
    Native grids r_i = i dr (i = 1..nodes) and k_j = pi j / ((nodes + 1) dr).
    """
    if nodes < 2:
        raise ValueError(f"At least 2 grid nodes are required, got {nodes}")
    dr = rmax / (nodes + 1)
    r = dr * np.arange(1, nodes + 1)
    k = np.pi * np.arange(1, nodes + 1) / ((nodes + 1) * dr)
    return r, k


def hankel_forward_dst(f_r, r):
    """
    Forward transform along the last axis; ``f_r`` may be (Nr,) or (N, N, Nr).
    """
    N = len(r)
    dr = r[1] - r[0]
    Rmax = (N + 1) * dr
    k = np.pi * np.arange(1, N + 1) / Rmax
    X = dst(r * f_r, type=1, axis=-1)
    Fk = (2.0 * np.pi * dr / k) * X
    return k, Fk


def hankel_inverse_dst(k, Fk, r):
    """
    Inverse transform along the last axis. scipy.fftpack's idst is the
    unnormalised DST-I, hence the factor 1/2 folded into 4 pi^2.
    """
    N = len(r)
    dr = r[1] - r[0]
    dk = np.pi / ((N + 1) * dr)
    y = idst(k * Fk, type=1, axis=-1)
    return (dk / (4.0 * np.pi**2 * r)) * y


def hankel_transform_matrix_fast(f_r_matrix, r):
    k, f_k_matrix = hankel_forward_dst(f_r_matrix, r)
    return f_k_matrix, k


def inverse_hankel_transform_matrix_fast(f_k_matrix, k, r):
    return hankel_inverse_dst(k, f_k_matrix, r)
