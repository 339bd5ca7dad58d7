"""
Engines subpackage

Request facade, result routing and persistence around the OZ solver.
"""


from .router import ClosureKind, OutputKind, ROUTING_TABLE, select, transform, output_filename
from .persistence import FileSink, MemorySink, write_series
from .facade import compute, direct_correlation, inverse_structure_factor, structure_factor, radial_distribution
