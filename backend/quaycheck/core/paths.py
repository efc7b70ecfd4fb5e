"""
Dynamic path resolution for quaycheck.

All paths are calculated from the installed package location so the server
behaves the same regardless of the current working directory.
"""

from pathlib import Path


def get_package_dir() -> Path:
    """
    Get the quaycheck package directory.

    Returns:
        Path: Absolute path to quaycheck/ directory
    """
    return Path(__file__).parent.parent.resolve()


def get_package_root() -> Path:
    """
    Get the directory containing the quaycheck/ folder.

    Returns:
        Path: Absolute path to the source root (backend/)
    """
    return get_package_dir().parent


def get_static_dir() -> Path:
    """
    Get the default directory for the browser UI assets.

    Returns:
        Path: <source root>/static
    """
    return get_package_root() / "static"
