"""Shared utilities for adapter implementations."""

import os
from typing import Optional

import openai
import requests


def create_session_with_pooling(
    pool_connections: int = 10,
    pool_maxsize: int = 20,
    max_retries: int = 3,
) -> requests.Session:
    """Create a requests Session with connection pooling.

    Args:
        pool_connections: Number of connection pools to cache.
        pool_maxsize: Maximum number of connections to save per pool.
        max_retries: Maximum number of retries per connection.

    Returns:
        Configured requests Session.
    """
    session = requests.Session()
    adapter = requests.adapters.HTTPAdapter(
        pool_connections=pool_connections,
        pool_maxsize=pool_maxsize,
        max_retries=max_retries,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def require_openai_api_key(api_key: Optional[str] = None) -> str:
    """Return the explicit key or OPENAI_API_KEY, failing before any request."""
    key = api_key or os.environ.get("OPENAI_API_KEY")
    if not key:
        raise ValueError("OPENAI_API_KEY environment variable is not set")
    return key


def is_quota_error(error: BaseException) -> bool:
    """Whether an upstream failure means the account has run out of quota."""
    if isinstance(error, openai.RateLimitError):
        if getattr(error, "code", None) == "insufficient_quota":
            return True
    return "quota" in str(error).lower()
