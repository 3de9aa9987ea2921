# tests/unit/test_init.py
import hollow_runner
from hollow_runner import __version__


def test_version_exists() -> None:
    """Test that __version__ is set."""
    assert isinstance(__version__, str)
    assert __version__


def test_public_names_are_exported() -> None:
    """Everything in __all__ is importable from the package."""
    for name in hollow_runner.__all__:
        assert hasattr(hollow_runner, name)
