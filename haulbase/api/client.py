"""
HTTP client for the fleet-management API.

Wraps `httpx.Client` with:
- Bearer token and organization slug headers on every request
- One transparent token refresh and replay on 401
- Conversion of error responses into ApiError with a readable message
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

import httpx
import structlog

from haulbase.api.auth import REFRESH_PATH, AuthApi
from haulbase.api.ava import AvaApi
from haulbase.api.brokers import BrokersApi
from haulbase.api.driver_connection import DriverConnectionApi
from haulbase.api.driver_portal import DriverPortalApi
from haulbase.api.driver_settings import DriverSettingsApi
from haulbase.api.drivers import DriversApi
from haulbase.api.expenses import ExpensesApi
from haulbase.api.facilities import FacilitiesApi
from haulbase.api.loads import LoadsApi
from haulbase.api.pnl import PnlApi
from haulbase.api.trailers import TrailersApi
from haulbase.api.trucks import TrucksApi
from haulbase.api.uploads import UploadsApi
from haulbase.core.config import EnvironmentSettings, get_config
from haulbase.core.errors import (
    DEFAULT_ERROR_MESSAGE,
    ApiError,
    AuthenticationError,
    message_from_payload,
)

# Credential endpoints answer 401 for bad input, not for an expired session.
NO_REFRESH_PREFIXES = (
    "/v1/auth/login",
    "/v1/auth/signup",
    "/v1/auth/verify",
    "/v1/auth/driver-signup",
    REFRESH_PATH,
)
UPLOAD_CHUNK_SIZE = 64 * 1024


class TokenStore:
    """
    Access/refresh token pair.

    Held in memory; when `path` is set the pair is also persisted as JSON so
    that a later process (e.g. the next CLI invocation) can reuse the session.
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        path: Optional[Path] = None,
    ) -> None:
        self.path = Path(path) if path else None
        self._access_token = access_token
        self._refresh_token = refresh_token

        if self.path is not None and self.path.exists() and not access_token:
            stored = self._read_stored()
            self._access_token = stored.get("access_token")
            self._refresh_token = stored.get("refresh_token")

    def _read_stored(self) -> dict[str, Any]:
        """Saved token pair; an unreadable file counts as no session."""
        try:
            stored = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except ValueError:
            structlog.get_logger(component="token_store").warning(
                "token_file_unreadable", path=str(self.path)
            )
            return {}
        return stored if isinstance(stored, dict) else {}

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @property
    def refresh_token(self) -> Optional[str]:
        return self._refresh_token

    def set_tokens(self, access_token: str, refresh_token: Optional[str]) -> None:
        """Replace both tokens and persist them if a path is configured."""
        self._access_token = access_token
        self._refresh_token = refresh_token
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps({"access_token": access_token, "refresh_token": refresh_token}),
                encoding="utf-8",
            )

    def clear(self) -> None:
        """Forget both tokens."""
        self._access_token = None
        self._refresh_token = None
        if self.path is not None and self.path.exists():
            self.path.unlink()


def build_params(params: Optional[dict[str, Any]]) -> Optional[list[tuple[str, str]]]:
    """
    Turn a filter dict into query parameters.

    None and empty-string values are dropped, lists repeat the key, booleans
    become "true"/"false" and enums are sent by value.
    """
    if not params:
        return None

    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None or value == "":
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            pairs.append((key, _param_value(item)))
    return pairs or None


def _param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class HaulbaseClient:
    """
    Client for the fleet-management REST API.

    Every resource API hangs off an instance:

        with HaulbaseClient() as client:
            loads = client.loads.get_loads({"status": "in_transit"})
    """

    def __init__(
        self,
        settings: Optional[EnvironmentSettings] = None,
        *,
        base_url: Optional[str] = None,
        tokens: Optional[TokenStore] = None,
        org_slug: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Environment settings (defaults to the global config)
            base_url: Overrides settings.api_url
            tokens: Token store (defaults to one built from settings)
            org_slug: Overrides settings.org_slug
            transport: Custom httpx transport, mainly for tests
            logger: Optional structured logger
        """
        settings = settings or get_config().env
        self.base_url = base_url or settings.api_url
        self.tokens = tokens or TokenStore(
            settings.access_token, settings.refresh_token, settings.token_file
        )
        self.org_slug = org_slug if org_slug is not None else settings.org_slug
        self.logger = logger or structlog.get_logger(component="api_client")

        self._http = httpx.Client(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=httpx.Timeout(settings.timeout_seconds),
            transport=transport,
        )

        self.auth = AuthApi(self)
        self.loads = LoadsApi(self)
        self.drivers = DriversApi(self)
        self.trucks = TrucksApi(self)
        self.trailers = TrailersApi(self)
        self.brokers = BrokersApi(self)
        self.facilities = FacilitiesApi(self)
        self.expenses = ExpensesApi(self)
        self.pnl = PnlApi(self)
        self.ava = AvaApi(self)
        self.uploads = UploadsApi(self)
        self.driver_portal = DriverPortalApi(self)
        self.driver_settings = DriverSettingsApi(self)
        self.driver_connection = DriverConnectionApi(self)

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    def get(self, path: str, params: Optional[dict[str, Any]] = None, raw: bool = False) -> Any:
        return self.request("GET", path, params=params, raw=raw)

    def post(
        self,
        path: str,
        json_body: Any = None,
        files: Optional[dict[str, Any]] = None,
    ) -> Any:
        return self.request("POST", path, json_body=json_body, files=files)

    def patch(self, path: str, json_body: Any = None) -> Any:
        return self.request("PATCH", path, json_body=json_body)

    def put(self, path: str, json_body: Any = None) -> Any:
        return self.request("PUT", path, json_body=json_body)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json_body: Any = None,
        files: Optional[dict[str, Any]] = None,
        raw: bool = False,
    ) -> Any:
        """
        Send one API request and return the decoded body.

        Args:
            method: HTTP method
            path: Path relative to the API base URL (e.g. "/v1/loads")
            params: Query filters, cleaned with build_params
            json_body: JSON request body
            files: Multipart files for upload endpoints
            raw: Return the raw response bytes instead of decoded JSON

        Returns:
            Decoded JSON body (or bytes when raw=True)

        Raises:
            AuthenticationError: 401 that a token refresh could not fix
            ApiError: Any other error response or transport failure
        """
        query = build_params(params)
        response = self._send(method, path, query, json_body, files)

        if response.status_code == 401 and not path.startswith(NO_REFRESH_PREFIXES):
            self._refresh_tokens()
            response = self._send(method, path, query, json_body, files)

        if response.is_error:
            raise self._error_from(response, method, path)

        return response.content if raw else _decode(response)

    def put_external(
        self,
        url: str,
        content: bytes,
        content_type: str,
        on_progress: Optional[Callable[[int], None]] = None,
    ) -> None:
        """
        PUT bytes to an absolute URL outside the API (presigned storage uploads).

        No auth headers are sent. `on_progress` receives whole percentages as
        chunks are streamed.
        """
        headers = {"Content-Type": content_type, "Content-Length": str(len(content))}
        body: Any = content
        if on_progress is not None:
            body = _progress_chunks(content, on_progress)

        try:
            response = self._http.request("PUT", url, content=body, headers=headers)
        except httpx.RequestError as e:
            self.logger.warning("upload_failed", error=str(e))
            raise ApiError("Upload failed") from e

        if response.is_error:
            self.logger.warning("upload_failed", status=response.status_code)
            raise ApiError(
                f"Upload failed with status {response.status_code}",
                status_code=response.status_code,
            )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.tokens.access_token:
            headers["Authorization"] = f"Bearer {self.tokens.access_token}"
        if self.org_slug:
            headers["X-Organization-Slug"] = self.org_slug
        return headers

    def _send(
        self,
        method: str,
        path: str,
        query: Optional[list[tuple[str, str]]],
        json_body: Any,
        files: Optional[dict[str, Any]],
    ) -> httpx.Response:
        self.logger.debug("api_request", method=method, path=path)
        try:
            return self._http.request(
                method,
                path,
                params=query,
                json=json_body,
                files=files,
                headers=self._headers(),
            )
        except httpx.RequestError as e:
            self.logger.warning("api_request_failed", method=method, path=path, error=str(e))
            raise ApiError(str(e) or DEFAULT_ERROR_MESSAGE) from e

    def _refresh_tokens(self) -> None:
        """Swap the refresh token for a new pair, or clear the session and raise."""
        refresh_token = self.tokens.refresh_token
        if not refresh_token:
            self.tokens.clear()
            raise AuthenticationError("Not authenticated", status_code=401)

        self.logger.info("refreshing_access_token")
        try:
            response = self._http.post(REFRESH_PATH, json={"refresh_token": refresh_token})
        except httpx.RequestError as e:
            self.tokens.clear()
            raise AuthenticationError(str(e) or DEFAULT_ERROR_MESSAGE) from e

        body = _decode(response)
        if response.is_error:
            self.tokens.clear()
            raise AuthenticationError(
                message_from_payload(body) or "Session expired",
                status_code=response.status_code,
                payload=body,
            )

        data = body.get("data") if isinstance(body, dict) else None
        tokens = (data or {}).get("tokens") or {}
        if not tokens.get("accessToken"):
            self.tokens.clear()
            raise AuthenticationError("Token refresh returned no access token", payload=body)

        self.tokens.set_tokens(tokens["accessToken"], tokens.get("refreshToken"))

    def _error_from(self, response: httpx.Response, method: str, path: str) -> ApiError:
        payload = _decode(response)
        message = message_from_payload(payload) or response.reason_phrase or DEFAULT_ERROR_MESSAGE

        self.logger.warning(
            "api_request_failed",
            method=method,
            path=path,
            status=response.status_code,
            message=message,
        )

        error_cls = AuthenticationError if response.status_code == 401 else ApiError
        return error_cls(message, status_code=response.status_code, payload=payload)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def __enter__(self) -> "HaulbaseClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _progress_chunks(content: bytes, on_progress: Callable[[int], None]) -> Iterator[bytes]:
    total = len(content) or 1
    sent = 0
    for start in range(0, len(content), UPLOAD_CHUNK_SIZE):
        chunk = content[start : start + UPLOAD_CHUNK_SIZE]
        sent += len(chunk)
        yield chunk
        on_progress(round(sent * 100 / total))
