# oz_solver/calculators/ornstein_zernike/registry.py

from .builtin import hnc_closure, rogers_young_closure

CLOSURE_REGISTRY = {
    "HNC": hnc_closure,
    "RY": rogers_young_closure,
}

# numeric closure identifiers accepted by the solver
CLOSURE_IDS = {
    2: "HNC",
    3: "RY",
}


def closure_name(closure):
    """
    Normalise a closure id (int) or name (str) to its registry key.
    """
    if isinstance(closure, str):
        key = closure.upper()
    else:
        key = CLOSURE_IDS.get(int(closure))
    if key not in CLOSURE_REGISTRY:
        raise ValueError(f"Unknown closure '{closure}'")
    return key
