"""Minimal version helper for the rotary_input package."""

from importlib import metadata
from pathlib import Path

PACKAGE_NAME = "rotary-input"
REPO_ROOT = Path(__file__).resolve().parents[2]


def get_version() -> str:
    """
    Get version for the package.

    Installed copies report the distribution metadata; a source checkout
    without an install asks ``setuptools_scm``.

    :return: Version number.
    """
    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:  # dev checkout
        import setuptools_scm  # type: ignore[import-untyped]

        return str(
            setuptools_scm.get_version(root=str(REPO_ROOT), fallback_version="0.0.0")
        )


__all__ = ["get_version"]
