# oz_solver/config.py

from dataclasses import dataclass, fields, replace
from pathlib import Path


@dataclass(frozen=True)
class SolverConfig:
    """
    Immutable solver configuration, passed explicitly to every entry point.

    Parameters
    ----------
    nrho : int
        Number of density-continuation steps from rho/nrho up to rho.
    diameter_scale : float
        Length unit d; species diameters are multiples of it.
    xnu : float
        Exponent of the soft-sphere potential.
    alpha : float
        Rogers-Young mixing parameter in f(r) = 1 - exp(-alpha r).
    tolerance : float
        Convergence threshold on max |delta gamma(r)| (EZ).
    sigma1, sigma2 : float
        Species diameters in units of ``diameter_scale``.
    rmax : float
        Extent of the native real-space grid.
    mole_fraction : float
        Mole fraction of species 1; species 2 gets the remainder.
    polydisperse : bool
        When False species 2 mirrors species 1 (see ``build_pair``).
    max_iterations : int
        Picard iterations allowed per density step.
    mixing_max : float
        Upper bound of the adaptive Picard mixing parameter.
    output_dir : str or Path
        Primary directory for result files.
    scratch_dir : str or Path, optional
        When set, per-run diagnostics are exported below it.
    plot : bool
        Also render PNG figures with the diagnostics.
    verbose : bool
        Print the iteration table and log at INFO level.
    """

    nrho: int = 100
    diameter_scale: float = 1.0
    xnu: float = 14.0
    alpha: float = 1.0
    tolerance: float = 1.0e-4
    sigma1: float = 1.0
    sigma2: float = 1.0
    rmax: float = 160.0
    mole_fraction: float = 1.0
    polydisperse: bool = False
    max_iterations: int = 10000
    mixing_max: float = 0.5
    output_dir: str | Path = "output"
    scratch_dir: str | Path | None = None
    plot: bool = False
    verbose: bool = False

    def __post_init__(self):
        if self.nrho < 1:
            raise ValueError(f"nrho must be >= 1, got {self.nrho}")
        if self.tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        if self.rmax <= 0:
            raise ValueError(f"rmax must be positive, got {self.rmax}")
        if self.diameter_scale <= 0:
            raise ValueError(f"diameter_scale must be positive, got {self.diameter_scale}")
        if not 0.0 <= self.mole_fraction <= 1.0:
            raise ValueError(f"mole_fraction must lie in [0, 1], got {self.mole_fraction}")
        if not 0.0 < self.mixing_max <= 1.0:
            raise ValueError(f"mixing_max must lie in (0, 1], got {self.mixing_max}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")

    @property
    def mole_fractions(self):
        return (self.mole_fraction, 1.0 - self.mole_fraction)

    def replace(self, **changes):
        return replace(self, **changes)


DEFAULT_CONFIG = SolverConfig()


def _convert(val):
    low = val.lower()
    if low in ("true", "yes", "on"):
        return True
    if low in ("false", "no", "off"):
        return False
    if low in ("none", "null", ""):
        return None
    try:
        num = float(val)
    except ValueError:
        return val
    if num.is_integer() and "." not in val and "e" not in low:
        return int(num)
    return num


def load_config(input_file, base=DEFAULT_CONFIG):
    """
    Build a ``SolverConfig`` from an input file.

    Only lines starting with 'oz' are considered, in the form
    ``oz key = value``. Blank lines and '#' comments are ignored.

    Parameters
    ----------
    input_file : str or Path
        Plain-text input file.
    base : SolverConfig
        Values not present in the file are taken from here.
    """
    input_file = Path(input_file)
    if not input_file.exists():
        raise FileNotFoundError(f"Input file not found: {input_file}")

    known = {f.name for f in fields(SolverConfig)}
    changes = {}

    with open(input_file) as f:
        for line in f:
            line = line.split("#")[0].strip()
            if not line:
                continue

            # Only process lines starting with 'oz'
            if not line.lower().startswith("oz"):
                continue

            content = line[2:].strip()
            if "=" not in content:
                continue

            key, val = content.split("=", 1)
            key = key.strip().lower()
            if key not in known:
                raise ValueError(f"Unknown configuration key '{key}' in {input_file}")
            changes[key] = _convert(val.strip())

    return base.replace(**changes)
