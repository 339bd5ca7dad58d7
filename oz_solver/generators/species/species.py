# oz_solver/generators/species/species.py

import math
from dataclasses import dataclass


@dataclass
class Species:
    diameter: float
    temperature: float
    temperature2: float
    lambda_: float
    lambda2: float

    def copy(self):
        return Species(
            diameter=self.diameter,
            temperature=self.temperature,
            temperature2=self.temperature2,
            lambda_=self.lambda_,
            lambda2=self.lambda2,
        )


@dataclass(frozen=True)
class PhysicalState:
    volume_factor: float
    diameter_scale: float
    alpha: float
    tolerance: float
    potential_id: int
    closure_id: int

    def __post_init__(self):
        if not self.volume_factor > 0:
            raise ValueError(f"volume_factor must be positive, got {self.volume_factor}")


def build_pair(
    diameter1,
    diameter2,
    temperature,
    temperature2,
    lambda_a,
    lambda_r,
    is_polydisperse=False,
):
    """
    Assemble the two species of a binary description.

    Species 1 takes ``diameter1`` and the thermal and range parameters.
    When ``is_polydisperse`` is False, species 2 is an independent field-wise
    copy of species 1: ``diameter2`` is ignored and species 2 always carries
    species 1's values. Results downstream depend on this, so callers wanting a
    genuinely different second species must pass ``is_polydisperse=True``.

    Returns
    -------
    (Species, Species)
    """
    species1 = Species(
        diameter=diameter1,
        temperature=temperature,
        temperature2=temperature2,
        lambda_=lambda_a,
        lambda2=lambda_r,
    )

    if is_polydisperse:
        species2 = Species(
            diameter=diameter2,
            temperature=temperature,
            temperature2=temperature2,
            lambda_=lambda_a,
            lambda2=lambda_r,
        )
    else:
        species2 = species1.copy()

    return species1, species2


def number_density(volume_factor, pair, mole_fractions, diameter_scale=1.0):
    """
    Total number density for packing fraction ``volume_factor``:

        rho = 6 phi / (pi d^3 sum_i x_i sigma_i^3)
    """
    moment = sum(x * s.diameter ** 3 for x, s in zip(mole_fractions, pair))
    return 6.0 * volume_factor / (math.pi * diameter_scale ** 3 * moment)
