# oz_solver/exceptions.py


class OZSolverError(Exception):
    """Base class for errors raised by oz_solver."""


class AllocationFailure(OZSolverError, MemoryError):
    """A native-grid or output buffer could not be allocated."""


class SolverNonConvergence(OZSolverError, RuntimeError):
    """
    The Ornstein-Zernike iteration did not reach self-consistency.

    Attributes
    ----------
    closure : str
        Closure name in use.
    density : float
        Number density of the continuation step that failed.
    iterations : int
        Picard iterations spent on that step.
    residual : float
        Last max |delta gamma(r)|, possibly nan.
    """

    def __init__(self, closure, density, iterations, residual):
        self.closure = closure
        self.density = density
        self.iterations = iterations
        self.residual = residual
        super().__init__(
            f"{closure} closure not converged at rho={density:.6g} "
            f"after {iterations} iterations (residual={residual:.3e})"
        )


class DivisionByZero(OZSolverError, ZeroDivisionError):
    """Inverse structure factor requested for a series with a zero ordinate."""


class PersistenceFailure(OZSolverError, OSError):
    """Neither the primary nor the fallback output path could be written."""
