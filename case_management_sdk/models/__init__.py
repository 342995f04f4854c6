"""Public models for the Case Management SDK.

Response models mirror the API's JSON payloads, option models describe one
request each, and payload models are the request bodies nested in options.
"""

from case_management_sdk.models.cases import (
    Attachment,
    AttachmentList,
    Case,
    CaseList,
    CasePayloadEu,
    Comment,
    DetailedResponse,
    Offering,
    OfferingType,
    PaginationLink,
    Resource,
    User,
    Watchlist,
    WatchlistAddResponse,
)
from case_management_sdk.models.options import (
    AddCommentOptions,
    AddResourceOptions,
    AddWatchlistOptions,
    CaseField,
    CaseSort,
    CaseStatusFilter,
    CaseType,
    CreateCaseOptions,
    DeleteFileOptions,
    GetCaseOptions,
    GetCasesOptions,
    RemoveWatchlistOptions,
    UpdateCaseStatusOptions,
    UploadFileOptions,
)
from case_management_sdk.models.payloads import (
    FileWithMetadata,
    ResolvePayload,
    ResourcePayload,
    StatusPayload,
    UnresolvePayload,
)

__all__ = [
    "Attachment",
    "AttachmentList",
    "Case",
    "CaseList",
    "CasePayloadEu",
    "Comment",
    "DetailedResponse",
    "Offering",
    "OfferingType",
    "PaginationLink",
    "Resource",
    "User",
    "Watchlist",
    "WatchlistAddResponse",
    "AddCommentOptions",
    "AddResourceOptions",
    "AddWatchlistOptions",
    "CaseField",
    "CaseSort",
    "CaseStatusFilter",
    "CaseType",
    "CreateCaseOptions",
    "DeleteFileOptions",
    "GetCaseOptions",
    "GetCasesOptions",
    "RemoveWatchlistOptions",
    "UpdateCaseStatusOptions",
    "UploadFileOptions",
    "FileWithMetadata",
    "ResolvePayload",
    "ResourcePayload",
    "StatusPayload",
    "UnresolvePayload",
]
