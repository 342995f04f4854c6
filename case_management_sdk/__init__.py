"""Case Management SDK for Python.

Client for the cloud support Case Management API: create and list cases,
add comments, manage watchlists, resolve or unresolve cases, and manage
attachments and linked resources.

Public API:
    CaseManagementClient - Client with one method per API operation
    models - Response, option and payload models
    exceptions - Error types raised by the client
"""

from case_management_sdk._version import __version__
from case_management_sdk.client import CaseManagementClient, get_case_management_client

__all__ = ["__version__", "CaseManagementClient", "get_case_management_client"]
