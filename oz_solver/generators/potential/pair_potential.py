# pair_potential.py

import numpy as np

from .pair_potential_registry import get_pair_potential_factory  # noqa
from .pair_potential_default import pair_potential_default

pair_potential_default()


def pair_potential(potential_id, params):
    """
    Vectorized pair potential dispatcher.
    """
    factory = get_pair_potential_factory(potential_id)
    return factory(params)


def pair_parameters(species_a, species_b, diameter_scale=1.0, xnu=14.0):
    """
    Potential parameters for the (a, b) pair; cross pairs use arithmetic means.
    """
    def mean(attr):
        return 0.5 * (getattr(species_a, attr) + getattr(species_b, attr))

    return {
        "sigma": diameter_scale * mean("diameter"),
        "temperature": mean("temperature"),
        "temperature2": mean("temperature2"),
        "lambda_a": mean("lambda_"),
        "lambda_r": mean("lambda2"),
        "xnu": xnu,
    }


def pair_potential_matrix(r, potential_id, pair, diameter_scale=1.0, xnu=14.0):
    """
    Tabulate beta*u_ij(r) for every species pair.

    Returns
    -------
    u_matrix : ndarray, shape (N, N, Nr)
    sigma_matrix : ndarray, shape (N, N)
    """
    n = len(pair)
    u_matrix = np.zeros((n, n, len(r)))
    sigma_matrix = np.zeros((n, n))

    for i in range(n):
        for j in range(i, n):   # <-- only j >= i
            params = pair_parameters(pair[i], pair[j], diameter_scale, xnu)
            u_val = pair_potential(potential_id, params)(r)

            # symmetric assignment
            u_matrix[i, j, :] = u_val
            u_matrix[j, i, :] = u_val
            sigma_matrix[i, j] = sigma_matrix[j, i] = params["sigma"]

    return u_matrix, sigma_matrix
