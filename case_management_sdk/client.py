"""Client for the Case Management API."""

import contextlib
import json
import time
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from case_management_sdk._internal.config import (
    DEFAULT_SERVICE_NAME,
    get_environment_properties,
    get_service_properties,
    parse_bool,
)
from case_management_sdk._internal.http import (
    DEFAULT_SERVICE_URL,
    DEFAULT_TIMEOUT,
    RETRY_STATUS_CODES,
    create_http_client,
    is_success,
)
from case_management_sdk._internal.redaction import redact_payload
from case_management_sdk.exceptions import (
    CaseManagementAPIError,
    CaseManagementConfigError,
    CaseManagementConnectionError,
    CaseManagementTimeoutError,
    CaseManagementValidationError,
)
from case_management_sdk.models.cases import (
    Attachment,
    AttachmentList,
    Case,
    CaseList,
    Comment,
    DetailedResponse,
    Resource,
    User,
    Watchlist,
    WatchlistAddResponse,
)
from case_management_sdk.models.options import (
    AddCommentOptions,
    AddResourceOptions,
    AddWatchlistOptions,
    CreateCaseOptions,
    DeleteFileOptions,
    GetCaseOptions,
    GetCasesOptions,
    RemoveWatchlistOptions,
    UpdateCaseStatusOptions,
    UploadFileOptions,
)
from case_management_sdk.models.payloads import (
    DEFAULT_UPLOAD_CONTENT_TYPE,
    DEFAULT_UPLOAD_FILENAME,
    FileWithMetadata,
)

DEFAULT_MAX_RETRIES = 4
DEFAULT_MAX_RETRY_INTERVAL = 30.0
RETRY_BASE_DELAY = 1.0

AUTH_TYPE_BEARER_TOKEN = "bearertoken"
AUTH_TYPE_NO_AUTH = "noauth"

ModelT = TypeVar("ModelT", bound=BaseModel)


class CaseManagementClient:
    """Client for the Case Management API.

    Each method performs exactly one request and returns a DetailedResponse
    holding the decoded model, the status code and the response headers.
    Non-success responses raise CaseManagementAPIError with the server's
    error body; nothing is retried unless ``enable_retries`` was called.

    The client holds no state between calls besides its configuration and
    the underlying connection pool. Use it as a context manager, or call
    ``close()``, to release the pool.

    Example:
        with CaseManagementClient.from_external_config() as client:
            created = client.create_case(
                CreateCaseOptions(
                    type=CaseType.TECHNICAL,
                    subject="Bucket unreachable",
                    description="Requests time out since 09:00 UTC",
                ).set_severity(4)
            )
            print(created.result.number)
    """

    def __init__(
        self,
        *,
        service_url: str | None = None,
        bearer_token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 0,
        max_retry_interval: float = DEFAULT_MAX_RETRY_INTERVAL,
        debug: bool = False,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            service_url: Base URL of the API. Defaults to the public endpoint.
            bearer_token: Token sent as ``Authorization: Bearer ...``.
            timeout: Default request timeout in seconds.
            max_retries: Retries for retryable failures (0 disables retries).
            max_retry_interval: Upper bound in seconds for a single backoff.
            debug: Enable debug logging to stderr.
            http_client: Pre-built httpx.Client to use instead of creating
                one. The caller keeps ownership and must close it.
        """
        self._service_url = (service_url or DEFAULT_SERVICE_URL).rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._max_retry_interval = max_retry_interval
        self._debug = debug
        self._owns_http_client = http_client is None
        self._http = http_client or create_http_client(
            timeout=timeout,
            base_url=self._service_url,
            bearer_token=bearer_token,
        )

    @classmethod
    def from_properties(cls, properties: dict[str, str]) -> "CaseManagementClient":
        """Create a client from service properties.

        Recognized properties:
            URL: Service base URL.
            AUTH_TYPE: "bearerToken" (default) or "noAuth".
            BEARER_TOKEN: Token for bearer authentication.
            TIMEOUT: Request timeout in seconds.
            MAX_RETRIES: Enables retries when greater than zero.
            RETRY_INTERVAL: Maximum backoff interval in seconds.
            DEBUG: Set to "1" or "true" to enable debug logging.

        Raises:
            CaseManagementConfigError: Unsupported auth type, or bearer auth
                without a token.
            ValueError: A numeric property is malformed.
        """
        auth_type = properties.get("AUTH_TYPE", AUTH_TYPE_BEARER_TOKEN).lower()
        bearer_token = properties.get("BEARER_TOKEN")
        if auth_type == AUTH_TYPE_NO_AUTH:
            bearer_token = None
        elif auth_type != AUTH_TYPE_BEARER_TOKEN:
            raise CaseManagementConfigError(f"Unsupported auth type: {auth_type}")
        elif not bearer_token:
            raise CaseManagementConfigError("BEARER_TOKEN is required for bearer token auth")

        return cls(
            service_url=properties.get("URL"),
            bearer_token=bearer_token,
            timeout=float(properties.get("TIMEOUT", str(DEFAULT_TIMEOUT))),
            max_retries=int(properties.get("MAX_RETRIES", "0")),
            max_retry_interval=float(
                properties.get("RETRY_INTERVAL", str(DEFAULT_MAX_RETRY_INTERVAL))
            ),
            debug=parse_bool(properties.get("DEBUG")),
        )

    @classmethod
    def from_env(cls, service_name: str = DEFAULT_SERVICE_NAME) -> "CaseManagementClient":
        """Create a client from ``<SERVICE_NAME>_*`` environment variables.

        Example environment:
            CASE_MANAGEMENT_URL: Service base URL.
            CASE_MANAGEMENT_BEARER_TOKEN: Bearer token.
            CASE_MANAGEMENT_DEBUG: Set to "1" to enable debug logging.
        """
        return cls.from_properties(get_environment_properties(service_name))

    @classmethod
    def from_external_config(
        cls, service_name: str = DEFAULT_SERVICE_NAME
    ) -> "CaseManagementClient":
        """Create a client from the credentials file or the environment.

        See ``get_service_properties`` for the lookup order.
        """
        return cls.from_properties(get_service_properties(service_name))

    @property
    def service_url(self) -> str:
        return self._service_url

    def enable_retries(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        max_retry_interval: float = DEFAULT_MAX_RETRY_INTERVAL,
    ) -> None:
        """Retry rate-limited (429), 5xx gateway/server errors and connection
        failures with exponential backoff. Timeouts are never retried."""
        self._max_retries = max_retries
        self._max_retry_interval = max_retry_interval

    def disable_retries(self) -> None:
        self._max_retries = 0

    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> "CaseManagementClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            import sys

            print(f"[case-management-sdk] {message}", file=sys.stderr)

    # =========================================================================
    # Request Plumbing
    # =========================================================================

    def _retry_delay(self, attempt: int, response: httpx.Response | None) -> float:
        if response is not None:
            retry_after = response.headers.get("Retry-After", "")
            if retry_after.isdigit():
                return min(float(retry_after), self._max_retry_interval)
        return min(RETRY_BASE_DELAY * (2**attempt), self._max_retry_interval)

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        files: list[tuple[str, tuple[str | None, bytes, str]]] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send one request, applying the retry policy.

        Raises:
            CaseManagementTimeoutError: The request timed out.
            CaseManagementConnectionError: The transport failed after retries.
            CaseManagementAPIError: The final response was not a success.
        """
        if json_body is not None:
            self._log_debug(f"{method} {path} body={json.dumps(redact_payload(json_body))}")
        else:
            self._log_debug(f"{method} {path} params={params or {}}")

        attempt = 0
        while True:
            try:
                response = self._http.request(
                    method,
                    path,
                    params=params,
                    json=json_body,
                    files=files,
                    timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
                )
            except httpx.TimeoutException as e:
                self._log_debug(f"{method} {path} timed out")
                raise CaseManagementTimeoutError(f"{method} {path} timed out") from e
            except httpx.TransportError as e:
                if attempt < self._max_retries:
                    delay = self._retry_delay(attempt, None)
                    self._log_debug(f"Transport error: {e}. Retrying in {delay:.2f}s")
                    time.sleep(delay)
                    attempt += 1
                    continue
                raise CaseManagementConnectionError(str(e)) from e

            if response.status_code in RETRY_STATUS_CODES and attempt < self._max_retries:
                delay = self._retry_delay(attempt, response)
                self._log_debug(
                    f"{method} {path} returned {response.status_code}. "
                    f"Retrying in {delay:.2f}s (attempt {attempt + 1}/{self._max_retries})"
                )
                time.sleep(delay)
                attempt += 1
                continue

            self._log_debug(f"{method} {path} returned {response.status_code}")
            if not is_success(response.status_code):
                raise self._api_error(response)
            return response

    def _api_error(self, response: httpx.Response) -> CaseManagementAPIError:
        try:
            body: Any = response.json()
        except ValueError:
            body = response.text or None

        message = None
        if isinstance(body, dict):
            errors = body.get("errors")
            if isinstance(errors, list) and errors and isinstance(errors[0], dict):
                message = errors[0].get("message")
            for key in ("error", "message", "errorMessage"):
                if not message and isinstance(body.get(key), str):
                    message = body[key]
        if not message:
            message = response.reason_phrase or f"HTTP {response.status_code}"

        self._log_debug(f"API error {response.status_code}: {redact_payload(body)}")
        return CaseManagementAPIError(
            message,
            status_code=response.status_code,
            body=body,
            headers=dict(response.headers),
        )

    def _decode(
        self, response: httpx.Response, model: type[ModelT]
    ) -> DetailedResponse[ModelT]:
        result: ModelT | None = None
        if response.content:
            try:
                result = model.model_validate(response.json())
            except (ValueError, ValidationError) as e:
                raise CaseManagementValidationError(
                    f"Malformed {model.__name__} response: {e}"
                ) from e
        return DetailedResponse[model](
            result=result,
            status_code=response.status_code,
            headers=dict(response.headers),
        )

    @staticmethod
    def _require(**values: Any) -> None:
        for name, value in values.items():
            if value is None or value == "" or value == []:
                raise CaseManagementValidationError(f"{name} must be provided")

    @staticmethod
    def _case_path(case_number: str, *parts: str) -> str:
        return "/".join(["/cases", quote(case_number, safe=""), *parts])

    # =========================================================================
    # Operations
    # =========================================================================

    def create_case(
        self, options: CreateCaseOptions, *, timeout: float | None = None
    ) -> DetailedResponse[Case]:
        """Create a new support case.

        Returns:
            The created case, including its server-assigned number.
        """
        self._require(
            type=options.type, subject=options.subject, description=options.description
        )
        body = options.model_dump(mode="json", exclude_none=True)
        response = self._request("POST", "/cases", json_body=body, timeout=timeout)
        return self._decode(response, Case)

    def get_cases(
        self, options: GetCasesOptions | None = None, *, timeout: float | None = None
    ) -> DetailedResponse[CaseList]:
        """List one page of cases.

        The returned CaseList carries ``total_count`` and the first, next and
        last page links; callers fetch further pages with a new offset.
        """
        options = options or GetCasesOptions()
        params: dict[str, Any] = {}
        if options.offset is not None:
            params["offset"] = options.offset
        if options.limit is not None:
            params["limit"] = options.limit
        if options.search is not None:
            params["search"] = options.search
        if options.sort is not None:
            params["sort"] = options.sort
        if options.status is not None:
            params["status"] = ",".join(options.status)
        if options.fields is not None:
            params["fields"] = ",".join(options.fields)

        response = self._request("GET", "/cases", params=params, timeout=timeout)
        return self._decode(response, CaseList)

    def get_case(
        self, options: GetCaseOptions, *, timeout: float | None = None
    ) -> DetailedResponse[Case]:
        """Fetch one case, optionally restricted to ``options.fields``."""
        self._require(case_number=options.case_number)
        params: dict[str, Any] = {}
        if options.fields is not None:
            params["fields"] = ",".join(options.fields)

        response = self._request(
            "GET", self._case_path(options.case_number), params=params, timeout=timeout
        )
        return self._decode(response, Case)

    def add_comment(
        self, options: AddCommentOptions, *, timeout: float | None = None
    ) -> DetailedResponse[Comment]:
        self._require(case_number=options.case_number, comment=options.comment)
        response = self._request(
            "PUT",
            self._case_path(options.case_number, "comments"),
            json_body={"comment": options.comment},
            timeout=timeout,
        )
        return self._decode(response, Comment)

    def add_watchlist(
        self, options: AddWatchlistOptions, *, timeout: float | None = None
    ) -> DetailedResponse[WatchlistAddResponse]:
        """Add users to a case's watchlist.

        Users the server could not add are listed in ``result.failed``; this
        is still a successful response.
        """
        self._require(case_number=options.case_number)
        response = self._request(
            "PUT",
            self._case_path(options.case_number, "watchlist"),
            json_body=self._watchlist_body(options.watchlist),
            timeout=timeout,
        )
        return self._decode(response, WatchlistAddResponse)

    def remove_watchlist(
        self, options: RemoveWatchlistOptions, *, timeout: float | None = None
    ) -> DetailedResponse[Watchlist]:
        """Remove users from a case's watchlist. Returns the remaining watchlist."""
        self._require(case_number=options.case_number)
        response = self._request(
            "DELETE",
            self._case_path(options.case_number, "watchlist"),
            json_body=self._watchlist_body(options.watchlist),
            timeout=timeout,
        )
        return self._decode(response, Watchlist)

    @staticmethod
    def _watchlist_body(watchlist: list[User] | None) -> dict[str, Any]:
        if watchlist is None:
            return {}
        return {
            "watchlist": [user.model_dump(mode="json", exclude_none=True) for user in watchlist]
        }

    def update_case_status(
        self, options: UpdateCaseStatusOptions, *, timeout: float | None = None
    ) -> DetailedResponse[Case]:
        """Resolve or unresolve a case.

        Illegal transitions are rejected by the server with an API error.
        """
        self._require(
            case_number=options.case_number, status_payload=options.status_payload
        )
        response = self._request(
            "PUT",
            self._case_path(options.case_number, "status"),
            json_body=options.status_payload.model_dump(mode="json", exclude_none=True),
            timeout=timeout,
        )
        return self._decode(response, Case)

    @staticmethod
    def _read_upload(item: FileWithMetadata) -> bytes:
        content = item.data.read() if hasattr(item.data, "read") else item.data
        if isinstance(content, str):
            content = content.encode("utf-8")
        if not isinstance(content, bytes | bytearray):
            raise TypeError(f"expected bytes or a binary stream, got {type(content).__name__}")
        return bytes(content)

    def upload_file(
        self, options: UploadFileOptions, *, timeout: float | None = None
    ) -> DetailedResponse[Attachment]:
        """Upload one or more files to a case as multipart/form-data.

        Every stream in ``options.file`` is read fully and closed before the
        request is sent, including when validation or reading fails. A
        failing close does not keep the remaining streams open.
        """
        files = []
        try:
            with contextlib.ExitStack() as streams:
                for item in options.file:
                    streams.callback(item.close)
                self._require(case_number=options.case_number, file=options.file)
                for item in options.file:
                    files.append(
                        (
                            "file",
                            (
                                item.filename or DEFAULT_UPLOAD_FILENAME,
                                self._read_upload(item),
                                item.content_type or DEFAULT_UPLOAD_CONTENT_TYPE,
                            ),
                        )
                    )
        except (OSError, ValueError, TypeError) as e:
            raise CaseManagementValidationError(f"Failed to read upload stream: {e}") from e

        response = self._request(
            "PUT",
            self._case_path(options.case_number, "attachments"),
            files=files,
            timeout=timeout,
        )
        return self._decode(response, Attachment)

    def delete_file(
        self, options: DeleteFileOptions, *, timeout: float | None = None
    ) -> DetailedResponse[AttachmentList]:
        """Remove an attachment. Returns the case's remaining attachments."""
        self._require(case_number=options.case_number, file_id=options.file_id)
        response = self._request(
            "DELETE",
            self._case_path(options.case_number, "attachments", quote(options.file_id, safe="")),
            timeout=timeout,
        )
        return self._decode(response, AttachmentList)

    def add_resource(
        self, options: AddResourceOptions, *, timeout: float | None = None
    ) -> DetailedResponse[Resource]:
        """Link a cloud resource to a case."""
        self._require(case_number=options.case_number)
        body = options.model_dump(mode="json", exclude_none=True, exclude={"case_number"})
        response = self._request(
            "PUT",
            self._case_path(options.case_number, "resource"),
            json_body=body,
            timeout=timeout,
        )
        return self._decode(response, Resource)


def get_case_management_client(
    service_name: str = DEFAULT_SERVICE_NAME,
) -> CaseManagementClient:
    """Get a client configured from the credentials file or environment.

    Convenience wrapper around ``CaseManagementClient.from_external_config``.
    """
    return CaseManagementClient.from_external_config(service_name)
