# oz_solver/engines/persistence.py

from pathlib import Path

import numpy as np

from oz_solver.exceptions import PersistenceFailure
from oz_solver.utils import get_logger

logger = get_logger(__name__)


def _dump(path, series):
    data = np.column_stack((series.x, series.y))
    with open(path, "w") as f:
        np.savetxt(f, data, fmt="%.17f", delimiter="\t")


def write_series(path, series, fallback=None, strict=False):
    """
    Write native-grid (x, y) pairs, one tab-separated line per point.

    Parameters
    ----------
    path : str or Path
        Primary destination. Its directory is never created.
    series : NativeSeries
    fallback : str or Path, optional
        Tried once when ``path`` cannot be opened.
    strict : bool
        Raise ``PersistenceFailure`` instead of logging when every attempt fails.

    Returns
    -------
    Path or None
        Where the data landed.
    """
    path = Path(path)
    try:
        _dump(path, series)
        return path
    except OSError as e:
        if fallback is None:
            failure = e
        else:
            logger.warning(f"Could not open {path} for writing ({e}). Trying {fallback}.")
            try:
                _dump(Path(fallback), series)
                return Path(fallback)
            except OSError as e2:
                failure = e2

    msg = f"Could not write {path.name}: {failure}"
    if strict:
        raise PersistenceFailure(msg)
    logger.error(msg)
    return None


class FileSink:
    """
    Writes each result under ``output_dir``, falling back to ``fallback_dir``
    (the working directory by default) with the same file name.
    """

    def __init__(self, output_dir="output", fallback_dir="."):
        self.output_dir = Path(output_dir)
        self.fallback_dir = Path(fallback_dir)

    def write(self, filename, series):
        return write_series(
            self.output_dir / filename,
            series,
            fallback=self.fallback_dir / filename,
        )


class MemorySink:
    """Collects series in memory, keyed by file name."""

    def __init__(self):
        self.records = {}

    def write(self, filename, series):
        self.records[filename] = series
        return filename

    def __getitem__(self, filename):
        return self.records[filename]

    def __contains__(self, filename):
        return filename in self.records
