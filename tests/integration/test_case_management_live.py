"""Integration tests against a live Case Management service.

Skipped unless ``case_management.env`` exists in the repository root. The
file uses the credentials-file format read by ``get_service_properties``:

    CASE_MANAGEMENT_URL=https://support-center.test.cloud.ibm.com/case-management/v1
    CASE_MANAGEMENT_AUTH_TYPE=bearerToken
    CASE_MANAGEMENT_BEARER_TOKEN=<token>
    CASE_MANAGEMENT_RESOURCE_CRN=<crn of a resource in the account>

Tests share one case and run in file order: the case created first is the
target of every later test.
"""

import io
import os
import sys
from pathlib import Path

import pytest

from case_management_sdk._internal.config import get_service_properties
from case_management_sdk.client import CaseManagementClient
from case_management_sdk.exceptions import CaseManagementAPIError
from case_management_sdk.models import (
    AddCommentOptions,
    AddResourceOptions,
    AddWatchlistOptions,
    CaseField,
    CaseType,
    CreateCaseOptions,
    DeleteFileOptions,
    FileWithMetadata,
    GetCaseOptions,
    GetCasesOptions,
    Offering,
    OfferingType,
    RemoveWatchlistOptions,
    ResolvePayload,
    UnresolvePayload,
    UpdateCaseStatusOptions,
    UploadFileOptions,
    User,
)
from case_management_sdk.models.cases import OFFERING_TYPE_GROUP_CRN_SERVICE_NAME

pytestmark = pytest.mark.integration

CONFIG_FILE = Path(__file__).resolve().parents[2] / "case_management.env"
COMMENT_VALUE = "Test comment"
WATCHLIST = [User(realm="IBMid", user_id="abc@ibm.com")]


@pytest.fixture(scope="module")
def config():
    if not CONFIG_FILE.is_file():
        pytest.skip(f"External configuration file not found: {CONFIG_FILE}")

    previous = os.environ.get("IBM_CREDENTIALS_FILE")
    os.environ["IBM_CREDENTIALS_FILE"] = str(CONFIG_FILE)
    try:
        properties = get_service_properties()
    finally:
        if previous is None:
            del os.environ["IBM_CREDENTIALS_FILE"]
        else:
            os.environ["IBM_CREDENTIALS_FILE"] = previous

    if not properties.get("URL"):
        pytest.skip("Unable to load service URL configuration property")
    assert properties.get("RESOURCE_CRN")
    return properties


@pytest.fixture(scope="module")
def client(config):
    client = CaseManagementClient.from_properties({**config, "TIMEOUT": "120"})
    client.enable_retries(max_retries=4, max_retry_interval=30.0)
    print(f"\nService URL: {client.service_url}", file=sys.stderr)
    yield client
    client.close()


@pytest.fixture(scope="module")
def state():
    return {}


def _create_options() -> CreateCaseOptions:
    offering = Offering(
        name="Cloud Object Storage",
        type=OfferingType(
            group=OFFERING_TYPE_GROUP_CRN_SERVICE_NAME, key="cloud-object-storage"
        ),
    )
    return (
        CreateCaseOptions(
            type=CaseType.TECHNICAL,
            subject="Test case for Python SDK",
            description="Test case for Python SDK",
        )
        .set_severity(4)
        .set_offering(offering)
    )


def _case_number(state) -> str:
    if "case_number" not in state:
        pytest.skip("No case was created")
    return state["case_number"]


class TestCreateCase:
    """Tests for create_case against the live service."""

    def test_create_technical_case(self, client, state):
        """Should create a technical case and echo back the submitted fields."""
        options = _create_options()
        response = client.create_case(options, timeout=30)

        assert response.status_code == 200
        assert response.result.number
        assert response.result.short_description == options.subject
        assert response.result.description == options.description
        assert response.result.severity == options.severity
        state["case_number"] = response.result.number

    def test_bad_payload(self, client):
        """Should raise CaseManagementAPIError for an unknown case type."""
        options = _create_options().set_type("invalid_type")
        options.severity = None
        options.offering = None

        with pytest.raises(CaseManagementAPIError) as exc_info:
            client.create_case(options, timeout=30)
        assert exc_info.value.status_code != 200


class TestGetCases:
    """Tests for get_cases against the live service."""

    def test_default_params(self, client):
        """Should return a page with count, pagination links and cases."""
        response = client.get_cases()

        assert response.status_code == 200
        assert response.result.total_count is not None
        assert response.result.first is not None
        assert response.result.next is not None
        assert response.result.last is not None
        assert response.result.cases is not None

    def test_non_default_params(self, client):
        """Should return only the requested fields for each case."""
        options = (
            GetCasesOptions()
            .set_offset(10)
            .set_limit(20)
            .set_fields([CaseField.NUMBER, CaseField.COMMENTS, CaseField.CREATED_AT])
        )
        response = client.get_cases(options)

        assert response.status_code == 200
        case = response.result.cases[0]
        assert case.number is not None
        assert case.comments is not None
        assert case.created_at is not None
        assert case.severity is None
        assert case.contact is None

    def test_bad_params(self, client):
        """Should raise CaseManagementAPIError for an unknown field name."""
        with pytest.raises(CaseManagementAPIError) as exc_info:
            client.get_cases(GetCasesOptions().set_fields(["invalid_fields"]))
        assert exc_info.value.status_code != 200


class TestGetCase:
    """Tests for get_case against the live service."""

    def test_default_params(self, client, state):
        """Should fetch the created case by number."""
        case_number = _case_number(state)
        response = client.get_case(GetCaseOptions(case_number=case_number))

        assert response.status_code == 200
        assert response.result.number == case_number

    def test_field_filtering(self, client, state):
        """Should leave fields that were not requested unset."""
        case_number = _case_number(state)
        options = GetCaseOptions(case_number=case_number).set_fields(["number", "severity"])
        response = client.get_case(options)

        assert response.result.number == case_number
        assert response.result.severity is not None
        assert response.result.contact is None

    def test_bad_params(self, client, state):
        """Should raise CaseManagementAPIError for an unknown field name."""
        options = GetCaseOptions(case_number=_case_number(state)).set_fields(["invalid_field"])
        with pytest.raises(CaseManagementAPIError) as exc_info:
            client.get_case(options)
        assert exc_info.value.status_code != 200


class TestComments:
    """Tests for add_comment against the live service."""

    def test_add_comment(self, client, state):
        """Should return the stored comment with its author and timestamp."""
        options = AddCommentOptions(case_number=_case_number(state), comment=COMMENT_VALUE)
        response = client.add_comment(options)

        assert response.status_code == 200
        assert response.result.value == COMMENT_VALUE
        assert response.result.added_at is not None
        assert response.result.added_by is not None


class TestWatchlist:
    """Tests for add_watchlist and remove_watchlist against the live service."""

    def test_add_watchlist(self, client, state):
        """Should report users outside the account as failed, not raise."""
        options = AddWatchlistOptions(case_number=_case_number(state)).set_watchlist(WATCHLIST)
        response = client.add_watchlist(options)

        assert response.status_code == 200
        # The fake user is not associated with the account.
        assert len(response.result.failed) == len(WATCHLIST)

    def test_remove_watchlist(self, client, state):
        """Should return the remaining watchlist."""
        options = RemoveWatchlistOptions(case_number=_case_number(state)).set_watchlist(
            WATCHLIST
        )
        response = client.remove_watchlist(options)

        assert response.status_code == 200
        assert response.result is not None


class TestUpdateStatus:
    """Tests for update_case_status against the live service."""

    def test_resolve(self, client, state):
        """Should move the case to Resolved."""
        options = UpdateCaseStatusOptions(
            case_number=_case_number(state),
            status_payload=ResolvePayload(resolution_code=1),
        )
        response = client.update_case_status(options)

        assert response.status_code == 200
        assert response.result.status == "Resolved"

    def test_unresolve(self, client, state):
        """Should move a resolved case back to In Progress."""
        options = UpdateCaseStatusOptions(
            case_number=_case_number(state),
            status_payload=UnresolvePayload(comment="Test unresolve"),
        )
        response = client.update_case_status(options)

        assert response.status_code == 200
        assert response.result.status == "In Progress"


class TestAttachments:
    """Tests for upload_file and delete_file against the live service."""

    def test_upload_file(self, client, state):
        """Should attach the file and return its id and filename."""
        file = FileWithMetadata(
            data=io.BytesIO(b"hello world"),
            filename="Python SDK test file.png",
            content_type="application/octet-stream",
        )
        options = UploadFileOptions(case_number=_case_number(state), file=[file])
        response = client.upload_file(options)

        assert response.status_code == 200
        assert response.result.id
        assert response.result.filename == file.filename
        state["file_id"] = response.result.id

    def test_delete_file(self, client, state):
        """Should remove the previously uploaded attachment."""
        case_number = _case_number(state)
        if not state.get("file_id"):
            pytest.skip("Case does not have target file to remove")

        response = client.delete_file(
            DeleteFileOptions(case_number=case_number, file_id=state["file_id"])
        )
        assert response.status_code == 200


class TestResources:
    """Tests for add_resource against the live service."""

    def test_add_resource(self, client, config, state):
        """Should link the configured resource CRN to the case."""
        crn = config["RESOURCE_CRN"]
        options = AddResourceOptions(case_number=_case_number(state)).set_crn(crn)
        response = client.add_resource(options)

        assert response.status_code == 200
        assert response.result.crn == crn
