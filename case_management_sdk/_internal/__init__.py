"""Internal modules for the Case Management SDK.

These are implementation details of CaseManagementClient and are not part
of the public API.

Modules:
    config - Service property loading (credentials file, environment)
    http - Shared HTTP client configuration
    redaction - Masking of credential-like values in debug output
"""
