"""
Skyclerk REST API client implementation.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar
from urllib.parse import urlsplit

import requests

from .. import __version__
from ..schemas import FileModel
from ..session import Session
from .errors import (
    DecodingError,
    InvalidURLError,
    SkyclerkAPIError,
    SkyclerkConnectionError,
    SkyclerkError,
    UnauthorizedError,
)
from .request import (
    FormBody,
    JsonBody,
    MultipartBody,
    QueryParams,
    RequestDescriptor,
    normalize_params,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

LAST_PAGE_HEADER = "X-Last-Page"


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """One page of a list endpoint."""

    items: T
    is_last_page: bool


def parse_last_page(value: str | None) -> bool:
    """Interpret the X-Last-Page header; absent or unparsable means False."""
    if value is None:
        return False
    return value.strip().lower() == "true"


class SkyclerkClient:
    """
    Client for the Skyclerk REST API.

    Features:
    - Bearer-token injection from the Session (fails fast when missing)
    - JSON, form-urlencoded and multipart request bodies
    - X-Last-Page pagination
    - Typed errors for every failure; no retries
    """

    DEFAULT_TIMEOUT = 60

    def __init__(
        self,
        base_url: str,
        session: Session,
        timeout: float = DEFAULT_TIMEOUT,
        http: requests.Session | None = None,
    ):
        """
        Initialize Skyclerk client.

        Args:
            base_url: Server origin (e.g., "https://app.skyclerk.com")
            session: Session holding the bearer token and active workspace
            timeout: Request timeout in seconds
            http: Optional pre-configured requests session
        """
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.timeout = timeout

        self.http = http or requests.Session()
        self.http.headers.update(
            {
                "Accept": "application/json",
                "User-Agent": f"skyclerk-python/{__version__}",
            }
        )

    def close(self) -> None:
        self.http.close()

    # URL helpers

    def server_url(self, path: str) -> str:
        """URL of a non-workspace endpoint, e.g. server_url("oauth/token")."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def workspace_url(self, path: str) -> str:
        """URL of a workspace-scoped endpoint: {base}/api/v3/{workspaceId}/{path}."""
        workspace_id = self.session.active_workspace_id
        if workspace_id is None:
            logger.warning(f"No active workspace selected; building {path!r} with workspace 0")
        return f"{self.base_url}/api/v3/{workspace_id or 0}/{path.lstrip('/')}"

    # Verbs

    def get(
        self,
        url: str,
        params: QueryParams = None,
        decoder: Callable[[Any], T] | None = None,
    ) -> T:
        """Authenticated GET. Returns decoder(json) or the raw JSON when no decoder."""
        response = self.send(RequestDescriptor("GET", url, normalize_params(params)))
        return self._decode(response, decoder)

    def get_paginated(
        self,
        url: str,
        params: QueryParams = None,
        decoder: Callable[[Any], T] | None = None,
    ) -> PaginatedResult[T]:
        """Authenticated GET that also reports the X-Last-Page header."""
        response = self.send(RequestDescriptor("GET", url, normalize_params(params)))
        is_last_page = parse_last_page(response.headers.get(LAST_PAGE_HEADER))
        return PaginatedResult(items=self._decode(response, decoder), is_last_page=is_last_page)

    def post(self, url: str, body: Any, decoder: Callable[[Any], T] | None = None) -> T | None:
        """Authenticated POST with a JSON body.

        Without a decoder the response body is ignored and None is returned.
        """
        response = self.send(RequestDescriptor("POST", url, body=JsonBody(body)))
        if decoder is None:
            return None
        return self._decode(response, decoder)

    def post_empty(self, url: str) -> None:
        """Authenticated POST with no body; the response body is ignored."""
        self.send(RequestDescriptor("POST", url))

    def post_json(self, url: str, body: Any, decoder: Callable[[Any], T] | None = None) -> T:
        """POST with a JSON body and no Authorization header (pre-login endpoints)."""
        response = self.send(
            RequestDescriptor("POST", url, body=JsonBody(body), requires_auth=False)
        )
        return self._decode(response, decoder)

    def post_form(
        self,
        url: str,
        params: Mapping[str, str],
        decoder: Callable[[Any], T] | None = None,
    ) -> T:
        """Form-urlencoded POST with no Authorization header (OAuth token exchange)."""
        response = self.send(
            RequestDescriptor(
                "POST", url, body=FormBody(tuple(params.items())), requires_auth=False
            )
        )
        return self._decode(response, decoder)

    def put(self, url: str, body: Any, decoder: Callable[[Any], T] | None = None) -> T:
        """Authenticated PUT with a JSON body."""
        response = self.send(RequestDescriptor("PUT", url, body=JsonBody(body)))
        return self._decode(response, decoder)

    def delete(self, url: str) -> None:
        """Authenticated DELETE; the response body is ignored."""
        self.send(RequestDescriptor("DELETE", url))

    def upload_file(
        self,
        url: str,
        data: bytes,
        file_name: str,
        mime_type: str,
        field_name: str = "file",
        extra_fields: Mapping[str, str] | None = None,
    ) -> FileModel:
        """Multipart upload returning the stored file's metadata."""
        body = MultipartBody(
            file_data=data,
            file_name=file_name,
            mime_type=mime_type,
            field_name=field_name,
            extra_fields=tuple((extra_fields or {}).items()),
        )
        response = self.send(RequestDescriptor("POST", url, body=body))
        return self._decode(response, FileModel.from_api_response)

    def upload_multipart(
        self,
        url: str,
        data: bytes,
        file_name: str,
        mime_type: str,
        extra_fields: Mapping[str, str] | None = None,
    ) -> None:
        """Multipart upload under the "photo" field; the response body is ignored."""
        body = MultipartBody(
            file_data=data,
            file_name=file_name,
            mime_type=mime_type,
            field_name="photo",
            extra_fields=tuple((extra_fields or {}).items()),
        )
        self.send(RequestDescriptor("POST", url, body=body))

    # Core

    def send(self, descriptor: RequestDescriptor) -> requests.Response:
        """
        Send one request and validate its status.

        Order: validate URL, inject auth, serialize body, send, check status.

        Raises:
            InvalidURLError, UnauthorizedError, EncodingError,
            SkyclerkConnectionError, SkyclerkAPIError
        """
        _validate_url(descriptor.url)

        headers: dict[str, str] = {}
        if descriptor.requires_auth:
            token = self.session.snapshot().bearer_token
            if not token:
                raise UnauthorizedError()
            headers["Authorization"] = f"Bearer {token}"

        data = None
        if descriptor.body is not None:
            data, content_type = descriptor.body.encode()
            headers["Content-Type"] = content_type

        try:
            prepared = self.http.prepare_request(
                requests.Request(
                    method=descriptor.method,
                    url=descriptor.url,
                    params=list(descriptor.params),
                    headers=headers,
                    data=data,
                )
            )
        except (
            requests.exceptions.InvalidURL,
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
        ) as e:
            raise InvalidURLError(descriptor.url) from e

        logger.debug(
            f"API Request: {descriptor.method} {prepared.url} "
            f"[auth={'yes' if descriptor.requires_auth else 'no'}]"
        )

        try:
            response = self.http.send(prepared, timeout=self.timeout)
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error to {prepared.url}: {e}")
            raise SkyclerkConnectionError(
                f"Failed to connect to Skyclerk at {self.base_url}: {e}"
            ) from e
        except requests.exceptions.Timeout as e:
            logger.error(f"Timeout for {prepared.url}: {e}")
            raise SkyclerkConnectionError(f"Request to Skyclerk timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for {prepared.url}: {e}")
            raise SkyclerkError(f"Request failed: {e}") from e

        logger.debug(
            f"Response status: {response.status_code} ({len(response.content)} bytes) "
            f"{response.content[:500]!r}"
        )

        if not 200 <= response.status_code <= 299:
            body = _response_text(response)
            logger.warning(f"API Error {response.status_code} for {descriptor.method} {prepared.url}")
            raise SkyclerkAPIError(status_code=response.status_code, response_body=body)

        return response

    @staticmethod
    def _decode(response: requests.Response, decoder: Callable[[Any], T] | None) -> T:
        try:
            data = response.json()
        except ValueError as e:
            raise DecodingError(e) from e

        if decoder is None:
            return data

        try:
            return decoder(data)
        except (KeyError, TypeError, ValueError) as e:
            raise DecodingError(e) from e


def _validate_url(url: str) -> None:
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError as e:
        raise InvalidURLError(url) from e
    if parts.scheme not in ("http", "https") or not hostname:
        raise InvalidURLError(url)


def _response_text(response: requests.Response) -> str:
    try:
        return response.content.decode("utf-8")
    except UnicodeDecodeError:
        return "Unknown error"
