"""
oz_solver package

Integral equation theory for colloidal fluids: solves the Ornstein-Zernike
equation under HNC or Rogers-Young closures and resamples c(k), S(k),
1/S(k) or g(r) onto caller supplied grids.
"""


from .config import SolverConfig, DEFAULT_CONFIG, load_config
from .exceptions import (
    OZSolverError,
    AllocationFailure,
    SolverNonConvergence,
    DivisionByZero,
    PersistenceFailure,
)
from .engines.router import ClosureKind, OutputKind, output_filename
from .engines.persistence import FileSink, MemorySink
from .engines.facade import (
    compute,
    direct_correlation,
    inverse_structure_factor,
    structure_factor,
    radial_distribution,
)

__version__ = "0.1.0"
