"""
Exceptions raised by the Skyclerk API client.

Each failed call raises exactly one of InvalidURLError, UnauthorizedError,
SkyclerkAPIError, DecodingError or EncodingError. Transport failures
(connection refused, timeout) raise SkyclerkConnectionError.
"""


class SkyclerkError(Exception):
    """Base exception for Skyclerk client errors."""

    pass


class InvalidURLError(SkyclerkError):
    """The URL and query parameters do not form a valid http(s) URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL: {url}")


class UnauthorizedError(SkyclerkError):
    """An authenticated call was attempted without a bearer token."""

    def __init__(self) -> None:
        super().__init__("Not authenticated. Please log in.")


class SkyclerkAPIError(SkyclerkError):
    """API returned a status outside 200-299."""

    def __init__(self, status_code: int, response_body: str):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(f"HTTP Error {status_code}: {response_body}")


class DecodingError(SkyclerkError):
    """The response body did not have the expected shape."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to decode response: {cause}")


class EncodingError(SkyclerkError):
    """The request payload could not be serialized."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to encode request: {cause}")


class SkyclerkConnectionError(SkyclerkError):
    """Failed to reach the Skyclerk server."""

    pass
