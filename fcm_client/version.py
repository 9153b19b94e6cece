"""Version information for fcm-client."""

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "fcm-client"

_VERSION: str | None = None


def get_version() -> str:
    """
    Get the installed package version.

    Returns:
        Version string (e.g., "0.1.0"), or "unknown" when running from a
        source tree that was never installed
    """
    global _VERSION

    if _VERSION is not None:
        return _VERSION

    try:
        _VERSION = version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        _VERSION = "unknown"
    return _VERSION


def user_agent() -> str:
    return f"{DISTRIBUTION_NAME}/{get_version()}"
