"""Version check."""

import oz_solver


def test_import() -> None:
    """Check that oz_solver can be imported and has a __version__ attribute."""
    assert hasattr(oz_solver, "__version__")
