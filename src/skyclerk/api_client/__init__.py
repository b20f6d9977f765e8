"""
Skyclerk REST API Client.

Provides:
- Authenticated GET/POST/PUT/DELETE with JSON bodies
- Form-urlencoded POST for the OAuth token exchange
- Multipart uploads for files and receipt photos
- X-Last-Page pagination
- Typed errors (invalid URL, unauthorized, HTTP, decoding, encoding)
"""

from .client import PaginatedResult, SkyclerkClient, parse_last_page
from .errors import (
    DecodingError,
    EncodingError,
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
    RequestDescriptor,
    build_multipart_body,
    encode_form,
)

__all__ = [
    "SkyclerkClient",
    "PaginatedResult",
    "parse_last_page",
    "SkyclerkError",
    "SkyclerkAPIError",
    "SkyclerkConnectionError",
    "InvalidURLError",
    "UnauthorizedError",
    "DecodingError",
    "EncodingError",
    "RequestDescriptor",
    "JsonBody",
    "FormBody",
    "MultipartBody",
    "build_multipart_body",
    "encode_form",
]
