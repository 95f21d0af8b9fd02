"""Error types for the Parcl v3 API client."""

from typing import Any


class ApiError(Exception):
    """Base exception for API errors."""

    pass


class TransportError(ApiError):
    """HTTP/network error raised by the underlying transport."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Transport error: {message}")


class RequestError(ApiError):
    """The server answered with a non-success status.

    The body is kept verbatim and is never parsed.
    """

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"Error status: {status}, body: {body!r}")


class DecodeError(ApiError):
    """Response body did not match the expected shape."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Decode error: {message}")


class CodecError(DecodeError):
    """A single wire field could not be decoded."""

    pass


class IdentifierParseError(CodecError):
    """Text is neither a numeric id nor an address."""

    def __init__(self, raw: Any):
        self.raw = raw
        super().__init__(f"Could not parse identifier from {raw!r}")


class ResponseShapeMismatchError(ApiError):
    """The market ids response variant differs from the requested kind."""

    def __init__(self, requested_kind: Any):
        self.requested_kind = requested_kind
        super().__init__(
            f"Invalid market ids response. Used {requested_kind} as ids response_kind."
        )


class InvalidParameterError(ApiError, ValueError):
    """Invalid parameter provided."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Invalid parameter: {message}")
