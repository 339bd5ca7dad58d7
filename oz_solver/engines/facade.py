# oz_solver/engines/facade.py

import numpy as np

from oz_solver.calculators.interpolation import resample
from oz_solver.calculators.ornstein_zernike import (
    NativeSeries,
    OrnsteinZernikeSolver,
    scratch_exporter,
)
from oz_solver.config import DEFAULT_CONFIG
from oz_solver.exceptions import AllocationFailure, OZSolverError
from oz_solver.generators.potential import get_pair_potential_factory
from oz_solver.generators.species import PhysicalState, build_pair
from oz_solver.utils import get_logger, new_run_id

from .persistence import FileSink
from .router import ClosureKind, OutputKind, output_filename, select, transform

logger = get_logger(__name__)


def allocate_buffers(nodes, n_query):
    """
    Request-scoped staging arrays. Nothing is kept once the request returns.

    Parameters
    ----------
    nodes : int
        Native grid size; sizes the buffer that receives the routed series.
    n_query : int
        Number of query points.

    Returns
    -------
    query_copy, staging, native_values : ndarray
        A private copy of the query grid, the interpolated values and the
        native-grid ordinates handed to resampling and persistence.
    """
    return (
        np.empty(n_query, dtype=float),
        np.zeros(n_query, dtype=float),
        np.empty(nodes, dtype=float),
    )


def _check_query(query_grid):
    query = np.asarray(query_grid, dtype=float)
    if query.ndim != 1 or query.size == 0:
        raise ValueError("query_grid must be a non-empty 1D sequence")
    if not np.all(np.isfinite(query)):
        raise ValueError("query_grid must contain finite values only")
    if np.any(np.diff(query) < 0):
        raise ValueError("query_grid must be ordered")
    return query


def compute(
    closure,
    output_kind,
    volume_factor,
    temperature,
    temperature2,
    lambda_a,
    lambda_r,
    query_grid,
    out=None,
    potential_number=1,
    nodes=2048,
    config=DEFAULT_CONFIG,
    solver=None,
    sink=None,
    run_label=None,
):
    """
    Solve the OZ equation and resample one quantity onto ``query_grid``.

    Parameters
    ----------
    closure : ClosureKind or str
        "HNC" or "RY".
    output_kind : OutputKind or str
        Direct correlation c(k), inverse structure factor, structure factor
        or radial distribution function.
    volume_factor : float
        Packing fraction, > 0.
    temperature, temperature2 : float
        Reduced temperatures of the attractive and repulsive parts.
    lambda_a, lambda_r : float
        Attraction and repulsion range parameters; their meaning depends on
        ``potential_number`` and they are not validated here.
    query_grid : array_like
        Ordered abscissae (k or r) inside the native grid range.
    out : ndarray, optional
        Caller-owned buffer of ``len(query_grid)`` entries, filled in place.
        Left untouched when the call fails.
    potential_number : int
        Pair potential identifier (see ``oz_solver.generators.potential``).
    nodes : int
        Native grid size of the solver.
    config : SolverConfig
        Species diameters, density continuation and closure parameters. With
        ``config.polydisperse`` False species 2 mirrors species 1, so
        ``config.sigma2`` has no effect.
    solver : object, optional
        Anything with the ``OrnsteinZernikeSolver.solve`` signature.
    sink : object, optional
        Anything with ``write(filename, series)``; defaults to a ``FileSink``
        on ``config.output_dir``.
    run_label : str, optional
        Defaults to a timestamp label.

    Returns
    -------
    ndarray
        ``out`` when given, otherwise a new array.

    Raises
    ------
    AllocationFailure
        Staging buffers, sized by ``nodes`` and the query grid, could not be
        allocated, or the solver ran out of memory on its native grid.
    SolverNonConvergence
        Propagated from the solver.
    DivisionByZero
        Inverse structure factor of a series with a zero ordinate.
    """
    closure = ClosureKind.parse(closure)
    output_kind = OutputKind.parse(output_kind)
    filename = output_filename(closure, output_kind)

    query = _check_query(query_grid)
    if out is not None and len(out) != len(query):
        raise ValueError(
            f"Output buffer has {len(out)} entries, query grid has {len(query)}"
        )
    if not volume_factor > 0:
        raise ValueError(f"volume_factor must be positive, got {volume_factor}")
    if not (np.isfinite(temperature) and np.isfinite(temperature2)):
        raise ValueError("temperatures must be finite")
    get_pair_potential_factory(potential_number)

    try:
        query_copy, staging, native_values = allocate_buffers(nodes, len(query))
    except MemoryError as e:
        logger.error(f"Memory allocation failed for {filename}: {e}")
        raise AllocationFailure(f"Memory allocation failed for {filename}") from e
    query_copy[:] = query

    pair = build_pair(
        config.sigma1,
        config.sigma2,
        temperature,
        temperature2,
        lambda_a,
        lambda_r,
        is_polydisperse=config.polydisperse,
    )
    state = PhysicalState(
        volume_factor=volume_factor,
        diameter_scale=config.diameter_scale,
        alpha=config.alpha,
        tolerance=config.tolerance,
        potential_id=potential_number,
        closure_id=closure.value,
    )

    if solver is None:
        exporter = None
        if config.scratch_dir is not None:
            exporter = scratch_exporter(config.scratch_dir, plot=config.plot)
        solver = OrnsteinZernikeSolver.from_config(config, exporter=exporter)

    run_label = run_label or new_run_id()
    try:
        result = solver.solve(
            nodes, config.nrho, config.rmax, pair, state, output_kind.value, run_label
        )
    except AllocationFailure:
        raise
    except MemoryError as e:
        logger.error(f"[{run_label}] Solver ran out of memory on {nodes} nodes: {e}")
        raise AllocationFailure(f"Memory allocation failed for {filename}") from e

    native = transform(output_kind, select(output_kind, result))
    if len(native) != nodes:
        raise OZSolverError(
            f"Solver returned {len(native)} points for a {nodes}-node grid"
        )
    native_values[:] = native.y
    native = NativeSeries(native.x, native_values)

    resample(native, query_copy, out=staging)

    if sink is None:
        sink = FileSink(config.output_dir)
    try:
        sink.write(filename, native)
    except OSError as e:
        logger.error(f"Could not persist {filename}: {e}")

    if out is None:
        return staging
    out[:] = staging
    return out


def direct_correlation(closure, volume_factor, temperature, temperature2,
                       lambda_a, lambda_r, query_grid, out=None, **kwargs):
    """Fourier transformed direct correlation function c(k)."""
    return compute(closure, OutputKind.DIRECT_CORRELATION, volume_factor,
                   temperature, temperature2, lambda_a, lambda_r, query_grid,
                   out=out, **kwargs)


def inverse_structure_factor(closure, volume_factor, temperature, temperature2,
                             lambda_a, lambda_r, query_grid, out=None, **kwargs):
    """1 / S(k)."""
    return compute(closure, OutputKind.INVERSE_STRUCTURE_FACTOR, volume_factor,
                   temperature, temperature2, lambda_a, lambda_r, query_grid,
                   out=out, **kwargs)


def structure_factor(closure, volume_factor, temperature, temperature2,
                     lambda_a, lambda_r, query_grid, out=None, **kwargs):
    """Static structure factor S(k)."""
    return compute(closure, OutputKind.STRUCTURE_FACTOR, volume_factor,
                   temperature, temperature2, lambda_a, lambda_r, query_grid,
                   out=out, **kwargs)


def radial_distribution(closure, volume_factor, temperature, temperature2,
                        lambda_a, lambda_r, query_grid, out=None, **kwargs):
    """Radial distribution function g(r); ``query_grid`` holds distances."""
    return compute(closure, OutputKind.RADIAL_DISTRIBUTION, volume_factor,
                   temperature, temperature2, lambda_a, lambda_r, query_grid,
                   out=out, **kwargs)
