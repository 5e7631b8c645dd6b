"""
Version information for the pintcheck package.
"""

# Version follows semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to the capability interface or report format
# MINOR: New checks, backwards compatible
# PATCH: Bug fixes, backwards compatible

__version__ = "1.0.0"

# Version components for programmatic access
VERSION_INFO = tuple(int(x) for x in __version__.split('.'))

# Development status
DEV_STATUS = "stable"  # alpha, beta, rc, stable


def get_version_info():
    """
    Get version information.

    Returns:
        dict: Version string, components and development status
    """
    return {
        "version": __version__,
        "version_info": VERSION_INFO,
        "dev_status": DEV_STATUS,
    }


def is_stable_release():
    """Check if this is a stable release."""
    return DEV_STATUS == "stable" and "dev" not in __version__
