"""
Version management for hurlkit.

The version is read from pyproject.toml, which serves as the single source of
truth in a source checkout. Installed copies fall back to the distribution
metadata.
"""

from importlib import metadata
from pathlib import Path

import tomli

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PYPROJECT_PATH = PROJECT_ROOT / "pyproject.toml"

_FALLBACK_VERSION = "0.0.0"


def get_version_from_pyproject() -> str:
    """
    Read the version string from pyproject.toml.

    Returns:
        str: Version string, or the installed distribution version when
        pyproject.toml is missing or does not describe hurlkit
    """
    try:
        with open(PYPROJECT_PATH, "rb") as f:
            pyproject_data = tomli.load(f)
        project = pyproject_data["project"]
        if project.get("name") == "hurlkit":
            return project["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        pass

    try:
        return metadata.version("hurlkit")
    except metadata.PackageNotFoundError:
        return _FALLBACK_VERSION


# The package version
__version__ = get_version_from_pyproject()


def get_version() -> str:
    """Get the current version of the hurlkit package."""
    return __version__
