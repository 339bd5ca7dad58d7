from .species import Species, PhysicalState, build_pair, number_density
