"""Shared utilities for github-merge-bot."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Get the installed version of the package.

    Returns
    -------
    str
        Version string from package metadata.

    """
    try:
        return version("github-merge-bot")
    except PackageNotFoundError:
        return "unknown"
