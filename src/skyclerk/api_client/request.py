"""
Request descriptors and body encoders.

A RequestDescriptor is built fresh for every call and never mutated. Its body
is one of JsonBody, FormBody or MultipartBody (or None); encoding happens only
when the client sends it, after authentication has been checked.
"""

import json
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union
from urllib.parse import quote

from .errors import EncodingError

QueryParams = Union[Mapping[str, Any], Iterable[tuple[str, Any]], None]


def normalize_params(params: QueryParams) -> tuple[tuple[str, str], ...]:
    """Ordered (key, value) pairs with None values dropped."""
    if params is None:
        return ()
    items = params.items() if isinstance(params, Mapping) else params
    return tuple((str(key), str(value)) for key, value in items if value is not None)


def encode_form(fields: Mapping[str, str]) -> str:
    """Percent-encode every key and value and join as key=value&...

    Nothing is left unescaped: a space becomes %20 and '&' becomes %26.
    """
    return "&".join(
        f"{quote(str(key), safe='')}={quote(str(value), safe='')}"
        for key, value in fields.items()
    )


def new_boundary() -> str:
    return f"Boundary-{str(uuid.uuid4()).upper()}"


def build_multipart_body(
    boundary: str,
    file_data: bytes,
    file_name: str,
    mime_type: str,
    field_name: str = "file",
    extra_fields: Iterable[tuple[str, str]] = (),
) -> bytes:
    """
    Build a multipart/form-data body.

    Text parts come first in the given order, the file part last:

        --{boundary}\\r\\n
        Content-Disposition: form-data; name="{key}"\\r\\n\\r\\n
        {value}\\r\\n
        ...
        --{boundary}\\r\\n
        Content-Disposition: form-data; name="{field}"; filename="{name}"\\r\\n
        Content-Type: {mime}\\r\\n\\r\\n
        {bytes}\\r\\n
        --{boundary}--\\r\\n
    """
    body = bytearray()

    for key, value in extra_fields:
        body += f"--{boundary}\r\n".encode()
        body += f'Content-Disposition: form-data; name="{key}"\r\n\r\n'.encode()
        body += f"{value}\r\n".encode()

    body += f"--{boundary}\r\n".encode()
    body += (
        f'Content-Disposition: form-data; name="{field_name}"; filename="{file_name}"\r\n'
    ).encode()
    body += f"Content-Type: {mime_type}\r\n\r\n".encode()
    body += file_data
    body += b"\r\n"

    body += f"--{boundary}--\r\n".encode()
    return bytes(body)


@dataclass(frozen=True)
class JsonBody:
    """A JSON payload: a WireModel (serialized via to_dict) or plain data."""

    payload: Any

    def encode(self) -> tuple[bytes, str]:
        payload = self.payload
        try:
            if hasattr(payload, "to_dict"):
                payload = payload.to_dict()
            text = json.dumps(payload, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise EncodingError(e) from e
        return text.encode("utf-8"), "application/json"


@dataclass(frozen=True)
class FormBody:
    """application/x-www-form-urlencoded fields."""

    fields: tuple[tuple[str, str], ...]

    def encode(self) -> tuple[bytes, str]:
        return encode_form(dict(self.fields)).encode("utf-8"), "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class MultipartBody:
    """One file part plus zero or more text parts."""

    file_data: bytes
    file_name: str
    mime_type: str
    field_name: str = "file"
    extra_fields: tuple[tuple[str, str], ...] = ()
    boundary: str = field(default_factory=new_boundary)

    def encode(self) -> tuple[bytes, str]:
        body = build_multipart_body(
            self.boundary,
            self.file_data,
            self.file_name,
            self.mime_type,
            field_name=self.field_name,
            extra_fields=self.extra_fields,
        )
        return body, f"multipart/form-data; boundary={self.boundary}"


RequestBody = Union[JsonBody, FormBody, MultipartBody, None]


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to send one HTTP call."""

    method: str
    url: str
    params: tuple[tuple[str, str], ...] = ()
    body: RequestBody = None
    requires_auth: bool = True
