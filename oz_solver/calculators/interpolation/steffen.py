# oz_solver/calculators/interpolation/steffen.py

import numpy as np
from scipy.interpolate import CubicHermiteSpline


def steffen_slopes(x, y):
    """
    Node derivatives of Steffen's monotone cubic (Astron. Astrophys. 239,
    443 (1990)).

    Interior slopes are limited so the interpolant never overshoots the data
    between nodes; the end slopes use the one-sided secant.
    """
    h = np.diff(x)
    s = np.diff(y) / h

    dydx = np.empty_like(y)
    dydx[0] = s[0]
    dydx[-1] = s[-1]

    if len(x) > 2:
        p = (s[:-1] * h[1:] + s[1:] * h[:-1]) / (h[:-1] + h[1:])
        bound = np.minimum(np.minimum(np.abs(s[:-1]), np.abs(s[1:])), 0.5 * np.abs(p))
        dydx[1:-1] = (np.sign(s[:-1]) + np.sign(s[1:])) * bound

    return dydx


def steffen_spline(x, y):
    """
    Steffen spline through (x, y) as a ``CubicHermiteSpline``.

    Evaluation outside [x[0], x[-1]] extends the end cubics.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    if x.ndim != 1 or x.shape != y.shape:
        raise ValueError("x and y must be 1D arrays of equal length")
    if len(x) < 2:
        raise ValueError("At least two points are required for interpolation")
    if np.any(np.diff(x) <= 0):
        raise ValueError("Abscissae must be strictly increasing")

    return CubicHermiteSpline(x, y, steffen_slopes(x, y), extrapolate=True)


def resample(native, query, out=None):
    """
    Evaluate a native-grid series at the query abscissae.

    Parameters
    ----------
    native : NativeSeries or (x, y) tuple
        Strictly increasing abscissae with their ordinates.
    query : array_like
        Query abscissae, expected within the native range.
    out : ndarray, optional
        Filled in place when given; must match ``query`` in length.

    Returns
    -------
    ndarray
    """
    if hasattr(native, "x"):
        x, y = native.x, native.y
    else:
        x, y = native

    query = np.asarray(query, dtype=float)
    values = steffen_spline(x, y)(query)

    if out is None:
        return values
    if len(out) != len(query):
        raise ValueError(
            f"Output buffer has {len(out)} entries, query grid has {len(query)}"
        )
    out[:] = values
    return out
