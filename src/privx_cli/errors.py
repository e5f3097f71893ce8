"""SDK error types."""

from __future__ import annotations

_STATUS_CATEGORIES = {
    400: "validation",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    409: "conflict",
    422: "validation",
}


class PrivXSDKError(RuntimeError):
    """Base SDK error."""


class ServiceUnavailableError(PrivXSDKError):
    """Service could not be reached."""


class ServiceRequestError(ServiceUnavailableError):
    """Service returned a structured HTTP error response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: object | None = None,
        error_code: str | None = None,
        body: object | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
        self.error_code = error_code
        self.body = body

    @property
    def category(self) -> str:
        return _STATUS_CATEGORIES.get(self.status_code or 0, "service")

    @property
    def is_forbidden(self) -> bool:
        return self.status_code == 403


class InvalidResponseError(PrivXSDKError):
    """Service answered with a payload the client cannot use."""


class UnknownClientTypeError(PrivXSDKError):
    """Trusted-client type token is not recognized for the operation."""


class LocalFileError(PrivXSDKError):
    """Downloaded content could not be written to the destination file."""
