# oz_solver/calculators/ornstein_zernike/closure.py

import numpy as np
from .registry import CLOSURE_REGISTRY


def closure_update_c_matrix(
    gamma_r_matrix,
    r,
    closure,
    u_matrix,
    alpha=1.0,
    closure_registry=CLOSURE_REGISTRY,
):
    """
    Apply one closure to every species pair.

    closure can be:
      - string: "HNC", "RY"
      - callable: user-defined closure fn(r, gamma, u, alpha)
    """
    if callable(closure):
        fn = closure
    else:
        key = closure.upper()
        if key not in closure_registry:
            raise ValueError(f"Unknown closure '{key}'")
        fn = closure_registry[key]

    N = gamma_r_matrix.shape[0]
    c_new = np.zeros_like(gamma_r_matrix)

    for i in range(N):
        for j in range(i, N):
            c_new[i, j, :] = fn(
                r=r,
                gamma=gamma_r_matrix[i, j, :],
                u=u_matrix[i, j, :],
                alpha=alpha,
            )
            c_new[j, i, :] = c_new[i, j, :]

    return c_new
