"""Per-operation options for CaseManagementClient.

Each options type takes its required fields as keyword arguments and exposes
fluent ``set_*`` setters for the optional ones:

    options = CreateCaseOptions(
        type=CaseType.TECHNICAL,
        subject="Bucket unreachable",
        description="Requests time out since 09:00 UTC",
    ).set_severity(4)

Enumerated values (case types, field names, sort keys) are offered as
constants but are not checked locally; the server rejects unknown values.
"""

from enum import StrEnum
from typing import Annotated, Any, Self

from pydantic import BaseModel, BeforeValidator, Field

from case_management_sdk.models.cases import CasePayloadEu, Offering, User
from case_management_sdk.models.payloads import (
    FileWithMetadata,
    ResourcePayload,
    StatusPayload,
)

# =============================================================================
# Enumerated Values
# =============================================================================


class CaseType(StrEnum):
    TECHNICAL = "technical"
    ACCOUNT_AND_ACCESS = "account_and_access"
    BILLING_AND_INVOICE = "billing_and_invoice"
    SALES = "sales"


class CaseField(StrEnum):
    """Field names accepted by the ``fields`` filter."""

    NUMBER = "number"
    SHORT_DESCRIPTION = "short_description"
    DESCRIPTION = "description"
    CREATED_AT = "created_at"
    CREATED_BY = "created_by"
    UPDATED_AT = "updated_at"
    UPDATED_BY = "updated_by"
    CONTACT_TYPE = "contact_type"
    CONTACT = "contact"
    STATUS = "status"
    SEVERITY = "severity"
    SUPPORT_TIER = "support_tier"
    RESOLUTION = "resolution"
    CLOSE_NOTES = "close_notes"
    EU = "eu"
    WATCHLIST = "watchlist"
    ATTACHMENTS = "attachments"
    OFFERING = "offering"
    RESOURCES = "resources"
    COMMENTS = "comments"


class CaseSort(StrEnum):
    """Sort keys for listing cases. Prefix with ``-`` for descending order."""

    NUMBER = "number"
    SHORT_DESCRIPTION = "short_description"
    SEVERITY = "severity"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class CaseStatusFilter(StrEnum):
    NEW = "new"
    IN_PROGRESS = "in_progress"
    WAITING_ON_CLIENT = "waiting_on_client"
    RESOLUTION_PROVIDED = "resolution_provided"
    RESOLVED = "resolved"
    CLOSED = "closed"


# =============================================================================
# Options
# =============================================================================


class OptionsModel(BaseModel):
    """Base for options: setters are validated like constructor arguments."""

    model_config = {"validate_assignment": True}


def _single_to_list(value: Any) -> Any:
    if isinstance(value, str):
        return [value]
    return value


# A bare string is sent as a one-element list, not split into characters.
StringList = Annotated[list[str] | None, BeforeValidator(_single_to_list)]


class CreateCaseOptions(OptionsModel):
    """Options for ``create_case``.

    Required fields:
        type: Case type (see CaseType)
        subject: Short description shown as the case title
        description: Full problem description

    Optional fields:
        severity: 1 (most severe) to 4
        eu: EU data-residency flags
        offering: Product the case is filed against
        resources: Cloud resources to link
        watchlist: Users to notify
        invoice_number: Invoice reference for billing cases
        sla_credit_request: Whether an SLA credit is requested
    """

    type: str
    subject: str
    description: str
    severity: int | None = None
    eu: CasePayloadEu | None = None
    offering: Offering | None = None
    resources: list[ResourcePayload] | None = None
    watchlist: list[User] | None = None
    invoice_number: str | None = None
    sla_credit_request: bool | None = None

    def set_type(self, type: str) -> Self:
        self.type = type
        return self

    def set_subject(self, subject: str) -> Self:
        self.subject = subject
        return self

    def set_description(self, description: str) -> Self:
        self.description = description
        return self

    def set_severity(self, severity: int | None) -> Self:
        self.severity = severity
        return self

    def set_eu(self, eu: CasePayloadEu | None) -> Self:
        self.eu = eu
        return self

    def set_offering(self, offering: Offering | None) -> Self:
        self.offering = offering
        return self

    def set_resources(self, resources: list[ResourcePayload] | None) -> Self:
        self.resources = resources
        return self

    def set_watchlist(self, watchlist: list[User] | None) -> Self:
        self.watchlist = watchlist
        return self

    def set_invoice_number(self, invoice_number: str | None) -> Self:
        self.invoice_number = invoice_number
        return self

    def set_sla_credit_request(self, sla_credit_request: bool | None) -> Self:
        self.sla_credit_request = sla_credit_request
        return self


class GetCasesOptions(OptionsModel):
    """Options for ``get_cases``. All fields are optional.

    ``status`` and ``fields`` are sent comma-separated.
    """

    offset: int | None = None
    limit: int | None = None
    search: str | None = None
    sort: str | None = None
    status: StringList = None
    fields: StringList = None

    def set_offset(self, offset: int | None) -> Self:
        self.offset = offset
        return self

    def set_limit(self, limit: int | None) -> Self:
        self.limit = limit
        return self

    def set_search(self, search: str | None) -> Self:
        self.search = search
        return self

    def set_sort(self, sort: str | None) -> Self:
        self.sort = sort
        return self

    def set_status(self, status: list[str] | str | None) -> Self:
        self.status = status
        return self

    def set_fields(self, fields: list[str] | str | None) -> Self:
        self.fields = fields
        return self


class GetCaseOptions(OptionsModel):
    case_number: str
    fields: StringList = None

    def set_case_number(self, case_number: str) -> Self:
        self.case_number = case_number
        return self

    def set_fields(self, fields: list[str] | str | None) -> Self:
        self.fields = fields
        return self


class AddCommentOptions(OptionsModel):
    case_number: str
    comment: str

    def set_case_number(self, case_number: str) -> Self:
        self.case_number = case_number
        return self

    def set_comment(self, comment: str) -> Self:
        self.comment = comment
        return self


class AddWatchlistOptions(OptionsModel):
    case_number: str
    watchlist: list[User] | None = None

    def set_case_number(self, case_number: str) -> Self:
        self.case_number = case_number
        return self

    def set_watchlist(self, watchlist: list[User] | None) -> Self:
        self.watchlist = watchlist
        return self


class RemoveWatchlistOptions(OptionsModel):
    case_number: str
    watchlist: list[User] | None = None

    def set_case_number(self, case_number: str) -> Self:
        self.case_number = case_number
        return self

    def set_watchlist(self, watchlist: list[User] | None) -> Self:
        self.watchlist = watchlist
        return self


class UpdateCaseStatusOptions(OptionsModel):
    """Options for ``update_case_status``.

    ``status_payload`` is either a ResolvePayload or an UnresolvePayload.
    The current status of the case is not checked before sending.
    """

    case_number: str
    status_payload: StatusPayload

    def set_case_number(self, case_number: str) -> Self:
        self.case_number = case_number
        return self

    def set_status_payload(self, status_payload: StatusPayload) -> Self:
        self.status_payload = status_payload
        return self


class UploadFileOptions(OptionsModel):
    case_number: str
    file: list[FileWithMetadata] = Field(default_factory=list)

    def set_case_number(self, case_number: str) -> Self:
        self.case_number = case_number
        return self

    def set_file(self, file: list[FileWithMetadata]) -> Self:
        self.file = file
        return self


class DeleteFileOptions(OptionsModel):
    case_number: str
    file_id: str

    def set_case_number(self, case_number: str) -> Self:
        self.case_number = case_number
        return self

    def set_file_id(self, file_id: str) -> Self:
        self.file_id = file_id
        return self


class AddResourceOptions(OptionsModel):
    """Options for ``add_resource``.

    Optional fields:
        crn: CRN of the resource to link
        type: Resource type (used with ``id`` for classic infrastructure)
        id: Classic infrastructure resource ID
        note: Free-form note stored with the link
    """

    case_number: str
    crn: str | None = None
    type: str | None = None
    id: float | None = None
    note: str | None = None

    def set_case_number(self, case_number: str) -> Self:
        self.case_number = case_number
        return self

    def set_crn(self, crn: str | None) -> Self:
        self.crn = crn
        return self

    def set_type(self, type: str | None) -> Self:
        self.type = type
        return self

    def set_id(self, id: float | None) -> Self:
        self.id = id
        return self

    def set_note(self, note: str | None) -> Self:
        self.note = note
        return self
