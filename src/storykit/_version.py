"""Installed storykit version."""

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "storykit"

# Reported when the package is imported from a source tree that was never installed
UNKNOWN_VERSION = "0.0.0"


def get_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
