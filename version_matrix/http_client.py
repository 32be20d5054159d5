"""HTTP client utilities with consistent user agent."""

from typing import Dict

import requests

from . import __version__

USER_AGENT = f"version-matrix-action/{__version__}"


def get_default_headers() -> Dict[str, str]:
    """
    Get default HTTP headers for feed requests.

    Returns:
        Dictionary of HTTP headers
    """
    return {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    }


def create_session() -> requests.Session:
    """Create a requests.Session preloaded with the default headers."""
    session = requests.Session()
    session.headers.update(get_default_headers())
    return session
