"""Request payload models for the Case Management API."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

# =============================================================================
# Constants
# =============================================================================

RESOLVE_ACTION = "resolve"
UNRESOLVE_ACTION = "unresolve"

DEFAULT_UPLOAD_CONTENT_TYPE = "application/octet-stream"
DEFAULT_UPLOAD_FILENAME = "attachment"


# =============================================================================
# Case Creation Parts
# =============================================================================


class ResourcePayload(BaseModel):
    """A cloud resource to link to a case, identified by CRN."""

    crn: str | None = None
    type: str | None = None
    id: float | None = None
    note: str | None = None


# =============================================================================
# Status Payloads
# =============================================================================


class ResolvePayload(BaseModel):
    """Resolve a case.

    Required fields:
        resolution_code: Server-defined resolution code (1 = "Resolved")

    Optional fields:
        comment: Comment recorded with the resolution
    """

    action: Literal["resolve"] = RESOLVE_ACTION
    resolution_code: int
    comment: str | None = None


class UnresolvePayload(BaseModel):
    """Reopen a resolved case. A comment explaining why is required."""

    action: Literal["unresolve"] = UNRESOLVE_ACTION
    comment: str


StatusPayload = Annotated[
    ResolvePayload | UnresolvePayload,
    Field(discriminator="action"),
]


# =============================================================================
# File Upload
# =============================================================================


class FileWithMetadata(BaseModel):
    """A file to upload, read from a caller-provided stream.

    ``data`` is any readable binary stream or bytes. The client closes the
    stream once the upload call returns, whether it succeeded or not.
    """

    data: Any
    filename: str | None = None
    content_type: str | None = None

    model_config = {"arbitrary_types_allowed": True}

    def close(self) -> None:
        close = getattr(self.data, "close", None)
        if callable(close):
            close()
