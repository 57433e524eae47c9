"""Errors raised when a call to the scoring service fails."""
from typing import Dict, Optional

DETAILS_LIMIT = 200


def truncate_details(text: str, limit: int = DETAILS_LIMIT) -> str:
    """Trim raw server text for display, marking the cut with a trailing ellipsis."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class GatewayError(Exception):
    """Base class for classified failures of a scoring service call."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        """Store the failure description.

        Args:
            message (str): human-readable description of the failure
            details (Optional[str]): supporting diagnostic text, if any
            status_code (Optional[int]): HTTP status of the response, if one was received
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.status_code = status_code

    def to_dict(self) -> Dict[str, str]:
        """Return the error in the {error, details} shape used on the wire."""
        error_dict = {"error": self.message}
        if self.details is not None:
            error_dict["details"] = self.details
        return error_dict

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"details={self.details!r}, status_code={self.status_code!r})"
        )


class NetworkError(GatewayError):
    """The transport failed before any response was received."""


class InvalidResponseFormat(GatewayError):
    """The body was not JSON, or not the array/object shape the call expects."""


class MalformedSuccessResponse(GatewayError):
    """The status was OK but the body failed the minimal shape check."""


class UpstreamError(GatewayError):
    """The service answered with a non-OK status or an explicit error field."""


class SubmissionError(Exception):
    """A submission was driven through an invalid state transition."""
