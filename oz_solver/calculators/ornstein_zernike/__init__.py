"""
Ornstein-Zernike subpackage

Closures, radial Fourier transforms and the OZ solver adapter.
"""


from .registry import CLOSURE_REGISTRY, CLOSURE_IDS, closure_name
from .closure import closure_update_c_matrix
from .transforms import hankel_forward_dst, hankel_inverse_dst
from .solver import OrnsteinZernikeSolver, NativeSeries, SolverResult
from .export import export_solution, scratch_exporter
