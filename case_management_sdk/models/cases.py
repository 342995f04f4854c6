"""Pydantic models for Case Management API responses.

Every field is optional: the server only returns the fields a caller asked
for when field filtering is used. Fields the server omitted stay ``None``;
``has_field`` tells an omitted field apart from one sent as null or empty.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

# =============================================================================
# Constants
# =============================================================================

OFFERING_TYPE_GROUP_CRN_SERVICE_NAME = "crn_service_name"
OFFERING_TYPE_GROUP_CATEGORY = "category"

CASE_STATUS_NEW = "New"
CASE_STATUS_IN_PROGRESS = "In Progress"
CASE_STATUS_WAITING_ON_CLIENT = "Waiting on Client"
CASE_STATUS_RESOLUTION_PROVIDED = "Resolution Provided"
CASE_STATUS_RESOLVED = "Resolved"
CASE_STATUS_CLOSED = "Closed"


# =============================================================================
# Base
# =============================================================================


class ResponseModel(BaseModel):
    """Base for all response models."""

    model_config = {"extra": "allow"}

    def has_field(self, name: str) -> bool:
        """Return True if the server sent ``name``, even as null or empty."""
        return name in self.model_fields_set


# =============================================================================
# Reference Data
# =============================================================================


class User(ResponseModel):
    """A person, identified by realm and user ID."""

    name: str | None = None
    realm: str | None = None
    user_id: str | None = None


class OfferingType(ResponseModel):
    group: str | None = None
    key: str | None = None
    kind: str | None = None
    id: str | None = None


class Offering(ResponseModel):
    """The product or service a case is filed against."""

    name: str | None = None
    type: OfferingType | None = None


class CasePayloadEu(ResponseModel):
    """EU data-residency flags for a case."""

    supported: bool | None = None
    data_center: int | None = None


# =============================================================================
# Case Parts
# =============================================================================


class Comment(ResponseModel):
    value: str | None = None
    added_at: str | None = None
    added_by: User | None = None


class Attachment(ResponseModel):
    """A file attached to a case."""

    id: str | None = None
    filename: str | None = None
    size_in_bytes: int | None = None
    created_at: str | None = None
    url: str | None = None


class AttachmentList(ResponseModel):
    attachments: list[Attachment] | None = None


class Resource(ResponseModel):
    """A cloud resource linked to a case."""

    crn: str | None = None
    name: str | None = None
    type: str | None = None
    url: str | None = None
    note: str | None = None


class Watchlist(ResponseModel):
    watchlist: list[User] | None = None


class WatchlistAddResponse(ResponseModel):
    """Result of adding users to a watchlist.

    A success response may still list users in ``failed``; the request as a
    whole succeeded even if some users could not be added.
    """

    added: list[User] | None = None
    failed: list[User] | None = None


# =============================================================================
# Case
# =============================================================================


class Case(ResponseModel):
    """A support case."""

    number: str | None = None
    short_description: str | None = None
    description: str | None = None
    created_at: str | None = None
    created_by: User | None = None
    updated_at: str | None = None
    updated_by: User | None = None
    contact_type: str | None = None
    contact: User | None = None
    status: str | None = None
    severity: int | None = None
    support_tier: str | None = None
    resolution: str | None = None
    close_notes: str | None = None
    eu: CasePayloadEu | None = None
    watchlist: list[User] | None = None
    attachments: list[Attachment] | None = None
    offering: Offering | None = None
    resources: list[Resource] | None = None
    comments: list[Comment] | None = None


class PaginationLink(ResponseModel):
    href: str | None = None


class CaseList(ResponseModel):
    """One page of cases.

    The client never follows ``next``; callers pass a new offset themselves.
    """

    total_count: int | None = None
    first: PaginationLink | None = None
    next: PaginationLink | None = None
    previous: PaginationLink | None = None
    last: PaginationLink | None = None
    cases: list[Case] | None = None


# =============================================================================
# Detailed Response
# =============================================================================

ResultT = TypeVar("ResultT")


class DetailedResponse(BaseModel, Generic[ResultT]):
    """Decoded result together with the HTTP status and headers."""

    result: ResultT | None = None
    status_code: int
    headers: dict[str, Any] = {}
