"""
Potential subpackage

Reduced pair potentials beta*u(r) addressed by integer identifier.
"""


from .pair_potential_registry import (
    PAIR_POTENTIAL_REGISTRY,
    register_pair_potential,
    get_pair_potential_factory,
)
from .pair_potential import pair_potential, pair_potential_matrix
