"""
Error Taxonomy - Failures that terminate a single analysis run.

Every adapter translates its library-specific exceptions into one of these
so the orchestrator only has to catch AnalysisError.
"""


class AnalysisError(Exception):
    """Base class for all reportable analysis failures."""


class ValidationError(AnalysisError, ValueError):
    """A breakpoint edit was rejected (value or index out of bounds)."""


class AuthError(AnalysisError):
    """No credential could be obtained for the authority."""


class EmptyResultError(AnalysisError):
    """The service answered but returned no usable polygons."""


class RemoteServiceError(AnalysisError):
    """
    The remote call itself failed.

    Covers transport errors, HTTP error statuses, malformed payloads and
    faults reported by the service in its response body.
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        details: list[str] | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or []
        self.retryable = retryable


class RunSupersededError(AnalysisError):
    """The run was cancelled because a newer click superseded it."""
