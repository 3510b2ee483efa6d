from typing import Any
from .base import SkillsClientError


class TransportError(SkillsClientError):
    """Request construction or send failures (bad URL, connection, timeout)."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        url: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {}) or {}
        if method:
            details["method"] = method
        if url:
            details["url"] = url
        super().__init__(
            message=message, code="TRANSPORT_ERROR", details=details, retryable=True, **kwargs
        )
        self.method = method
        self.url = url


class StatusError(SkillsClientError):
    """Response status did not match the operation's expected success code.

    The message is surfaced verbatim: depending on the operation it is the
    raw response body, the status line, or a short "status code N" sentence.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str = "",
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {}) or {}
        details["status_code"] = status_code
        super().__init__(message=message, code="STATUS_ERROR", details=details, **kwargs)
        self.status_code = status_code
        self.body = body


# Name used by callers that treat every non-matching response as a failed request.
RequestError = StatusError


class DecodeError(SkillsClientError):
    """Response body could not be parsed into the expected shape."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str = "",
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {}) or {}
        if status_code is not None:
            details["status_code"] = status_code
        if body:
            details["body_preview"] = body[:100] + "..." if len(body) > 100 else body
        super().__init__(message=message, code="DECODE_ERROR", details=details, **kwargs)
        self.status_code = status_code
        self.body = body
