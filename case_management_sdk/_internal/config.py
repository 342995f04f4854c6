"""Service property loading from a credentials file or the environment."""

import os
from pathlib import Path

from dotenv import dotenv_values

DEFAULT_SERVICE_NAME = "case_management"
CREDENTIALS_FILE_ENV = "IBM_CREDENTIALS_FILE"
DEFAULT_CREDENTIALS_FILENAME = "ibm-credentials.env"


def credentials_file_path() -> Path | None:
    """Locate the credentials file.

    Lookup order:
        1. Path named by the IBM_CREDENTIALS_FILE environment variable.
        2. ibm-credentials.env in the current working directory.
        3. ibm-credentials.env in the user's home directory.

    Returns:
        The first path that exists, or None.
    """
    explicit = os.environ.get(CREDENTIALS_FILE_ENV)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    for candidate in (
        Path.cwd() / DEFAULT_CREDENTIALS_FILENAME,
        Path.home() / DEFAULT_CREDENTIALS_FILENAME,
    ):
        if candidate.is_file():
            return candidate
    return None


def _filter_properties(source: dict[str, str | None], service_name: str) -> dict[str, str]:
    prefix = service_name.upper().replace("-", "_") + "_"
    return {
        key[len(prefix):]: value
        for key, value in source.items()
        if key.startswith(prefix) and value is not None
    }


def get_environment_properties(service_name: str = DEFAULT_SERVICE_NAME) -> dict[str, str]:
    """Read the properties configured for a service from the environment only."""
    return _filter_properties(dict(os.environ), service_name)


def get_service_properties(service_name: str = DEFAULT_SERVICE_NAME) -> dict[str, str]:
    """Read the properties configured for a service.

    Keys are looked up as ``<SERVICE_NAME>_<PROPERTY>`` (e.g.
    ``CASE_MANAGEMENT_URL``) and returned without the prefix. The credentials
    file is consulted first, then the process environment; the first source
    that defines any property for the service wins.

    Args:
        service_name: Service name used as the key prefix.

    Returns:
        Mapping of property name (e.g. ``URL``, ``RESOURCE_CRN``) to value.
        Empty if no source defines the service.
    """
    path = credentials_file_path()
    if path is not None:
        properties = _filter_properties(dotenv_values(path), service_name)
        if properties:
            return properties

    return get_environment_properties(service_name)


def parse_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes")
