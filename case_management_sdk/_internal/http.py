"""Shared HTTP client configuration."""

import httpx

from case_management_sdk._version import __version__

DEFAULT_SERVICE_URL = "https://support-center.cloud.ibm.com/case-management/v1"
DEFAULT_TIMEOUT = 120.0

RETRY_STATUS_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 504})


def create_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
    bearer_token: str | None = None,
) -> httpx.Client:
    """Create configured HTTP client.

    Args:
        timeout: Request timeout in seconds.
        base_url: Base URL for all requests. Defaults to the public endpoint.
        bearer_token: Optional token sent as ``Authorization: Bearer ...``.

    Returns:
        Configured httpx.Client instance.
    """
    headers = {
        "User-Agent": f"case-management-sdk/{__version__}",
        "Accept": "application/json",
    }
    if bearer_token:
        headers["Authorization"] = f"Bearer {bearer_token}"

    return httpx.Client(
        timeout=timeout,
        base_url=(base_url or DEFAULT_SERVICE_URL).rstrip("/"),
        headers=headers,
    )


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300
