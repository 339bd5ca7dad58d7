# oz_solver/engines/router.py

from dataclasses import dataclass
from enum import Enum
from typing import Callable

import numpy as np

from oz_solver.calculators.ornstein_zernike import NativeSeries
from oz_solver.exceptions import DivisionByZero


class ClosureKind(Enum):
    """Closure relation; the value is the solver's closure id."""

    HNC = 2
    RY = 3

    @property
    def stem(self):
        return self.name

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_")
            if key in ("ROGERS_YOUNG", "ROGERSYOUNG"):
                key = "RY"
            try:
                return cls[key]
            except KeyError:
                raise ValueError(f"Unknown closure '{value}'") from None
        return cls(value)


class OutputKind(Enum):
    """Requested quantity; the value is the solver's output flag."""

    STRUCTURE_FACTOR = 0
    DIRECT_CORRELATION = 1
    INVERSE_STRUCTURE_FACTOR = 2
    RADIAL_DISTRIBUTION = 3

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper().replace("-", "_")]
            except KeyError:
                raise ValueError(f"Unknown output kind '{value}'") from None
        return cls(value)


def identity(series):
    return series


def reciprocal(series):
    """
    1/y on the same abscissae. A zero ordinate is an error, never inf.
    """
    y = np.asarray(series.y, dtype=float)
    zeros = np.flatnonzero(y == 0.0)
    if zeros.size:
        raise DivisionByZero(
            f"Structure factor vanishes at x={series.x[zeros[0]]!r}; "
            "inverse structure factor undefined"
        )
    return NativeSeries(series.x, 1.0 / y)


@dataclass(frozen=True)
class Route:
    series: str
    transform: Callable
    suffix: str


ROUTING_TABLE = {
    OutputKind.DIRECT_CORRELATION: Route("fourier_transform", identity, "CdeK"),
    OutputKind.INVERSE_STRUCTURE_FACTOR: Route("structure_factor", reciprocal, "FT_CdeK"),
    OutputKind.STRUCTURE_FACTOR: Route("structure_factor", identity, "SdeK"),
    OutputKind.RADIAL_DISTRIBUTION: Route("radial_distribution", identity, "GdeR"),
}


def select(output_kind, result):
    """Native series of ``result`` (a SolverResult) feeding ``output_kind``."""
    route = ROUTING_TABLE[OutputKind.parse(output_kind)]
    return getattr(result, route.series)


def transform(output_kind, series):
    route = ROUTING_TABLE[OutputKind.parse(output_kind)]
    return route.transform(series)


def output_filename(closure, output_kind):
    """e.g. ``output_filename("HNC", "structure_factor") == "HNC_SdeK.dat"``"""
    closure = ClosureKind.parse(closure)
    route = ROUTING_TABLE[OutputKind.parse(output_kind)]
    return f"{closure.stem}_{route.suffix}.dat"
