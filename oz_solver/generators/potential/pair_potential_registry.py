# ============================================================
# GLOBAL REGISTRY
# ============================================================

PAIR_POTENTIAL_REGISTRY = {}
PAIR_POTENTIAL_NAMES = {}


def register_pair_potential(potential_id, name, factory_fn, overwrite=False):
    """
    Register a pair potential factory.

    Parameters
    ----------
    potential_id : int
        Identifier callers pass as ``potential_number``.
    name : str
        Human readable alias, also accepted by ``get_pair_potential_factory``.
    factory_fn : callable
        Function: dict -> callable(r) returning beta*u(r)
    overwrite : bool
        Allow overwriting existing registration
    """
    potential_id = int(potential_id)
    key = name.lower()

    if potential_id in PAIR_POTENTIAL_REGISTRY and not overwrite:
        raise KeyError(f"Pair potential {potential_id} already registered")

    PAIR_POTENTIAL_REGISTRY[potential_id] = factory_fn
    PAIR_POTENTIAL_NAMES[key] = potential_id


def get_pair_potential_factory(potential):
    """
    Resolve factory from registry by id or name.
    """
    if isinstance(potential, str):
        key = potential.lower()
        if key not in PAIR_POTENTIAL_NAMES:
            raise ValueError(f"Unknown potential type: {potential}")
        potential = PAIR_POTENTIAL_NAMES[key]

    if potential not in PAIR_POTENTIAL_REGISTRY:
        raise ValueError(f"Unknown potential id: {potential}")

    return PAIR_POTENTIAL_REGISTRY[potential]
