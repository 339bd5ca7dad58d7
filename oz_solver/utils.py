# oz_solver/utils.py

import logging
import sys
from datetime import datetime
from pathlib import Path
from dataclasses import dataclass

import numpy as np


@dataclass
class ExecutionContext:
    scratch_dir: Path | None = None
    plots_dir: Path | None = None


def get_logger(name: str, verbose: bool = False) -> logging.Logger:
    """
    Return a named logger with a single stream handler attached.

    The level is set only when the handler is first attached; later calls
    return the logger unchanged.

    Parameters
    ----------
    name : str
        Logger name, usually ``__name__``.
    verbose : bool
        INFO level when True, WARNING otherwise. Applied on first use of
        ``name`` only.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s [%(name)s] %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO if verbose else logging.WARNING)
    return logger


def safe_exp(x, xmin=-50.0, xmax=50.0):
    """
    Numerically safe exponential.
    Clips exponent argument before applying exp.
    """
    return np.exp(np.clip(x, xmin, xmax))


_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def new_run_id(now: datetime | None = None) -> str:
    """
    Timestamp label for a solver run, e.g. ``16Oct2026_183102``.

    Day, month abbreviation and year, an underscore, then hour, minute and
    second. Two runs started within the same second get the same label.
    """
    now = now or datetime.now()
    month = _MONTHS[now.month - 1]
    return f"{now.day}{month}{now.year}_{now:%H%M%S}"
