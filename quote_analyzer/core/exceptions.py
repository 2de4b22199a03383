"""
Application-level exceptions.

Every error carries an HTTP status_code and a stable error_code so the API
layer can render a consistent JSON body without knowing the concrete type.

    QuoteAnalyzerError
    ├── ValidationError
    │   └── InvalidBatchSize
    └── UpstreamError
        ├── UpstreamUnavailable
        ├── UpstreamTimeout
        ├── UpstreamRejected
        ├── MalformedUpstreamResponse
        └── UpstreamUnknown
"""

from __future__ import annotations


class QuoteAnalyzerError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(QuoteAnalyzerError):
    """Caller sent something we refuse to process. Never retried."""

    status_code = 400
    error_code = "validation_error"


class InvalidBatchSize(ValidationError):
    """Batch has fewer than the minimum or more than the maximum number of quotes."""

    error_code = "invalid_batch_size"

    def __init__(self, message: str, size: int):
        super().__init__(message)
        self.size = size


class UpstreamError(QuoteAnalyzerError):
    """The AI analysis service could not produce a usable result."""

    status_code = 502
    error_code = "upstream_error"


class UpstreamUnavailable(UpstreamError):
    """Connection refused or host not found."""

    status_code = 503
    error_code = "upstream_unavailable"


class UpstreamTimeout(UpstreamError):
    """The call did not complete within the configured timeout."""

    status_code = 504
    error_code = "upstream_timeout"


class UpstreamRejected(UpstreamError):
    """The AI service answered with a non-success status; that status is preserved."""

    error_code = "upstream_rejected"

    def __init__(self, message: str, status_code: int, detail: object = None):
        super().__init__(message, status_code=status_code)
        self.detail = detail


class MalformedUpstreamResponse(UpstreamError):
    """The AI service answered 2xx but the body does not match the expected schema."""

    status_code = 502
    error_code = "malformed_upstream_response"


class UpstreamUnknown(UpstreamError):
    """Any other failure while talking to the AI service."""

    status_code = 500
    error_code = "upstream_unknown"
