"""
Failure Envelope — How ShelfSort Reports What Went Wrong.

Malformed filter values never fail: the codec falls back to defaults.
What remains are requests the service refuses (an oversized collection)
and programming errors (a reducer branch that does not exist). Both are
raised as `KnownError` subclasses and rendered by `main.py` as an
`ErrorEnvelope`; anything else is reported as an unknown failure.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """What class of problem a failure belongs to."""

    COLLECTION_TOO_LARGE = "collection_too_large"
    INVARIANT_VIOLATION = "invariant_violation"
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


class FailureDetail(BaseModel):
    kind: FailureKind
    message: str = Field(..., description="Explanation suitable for the filter panel")
    detail: str | None = Field(default=None, description="Technical detail, if any")
    suggestion: str | None = None


class ErrorEnvelope(BaseModel):
    """Body of every non-validation error response."""

    outcome: OutcomeType
    failure: FailureDetail

    @classmethod
    def unknown_failure(cls, detail: str | None = None) -> "ErrorEnvelope":
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message="Something went wrong while filtering the collection.",
                detail=detail,
                suggestion="Reload the page; your filters are kept in the URL.",
            ),
        )


class KnownError(Exception):
    """Base class for failures the service can explain."""

    kind = FailureKind.UNKNOWN
    status_code = 400

    def __init__(self, message: str, detail: str | None = None, suggestion: str | None = None):
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_envelope(self) -> ErrorEnvelope:
        return ErrorEnvelope(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=self.kind,
                message=self.message,
                detail=self.detail,
                suggestion=self.suggestion,
            ),
        )


class CollectionTooLargeError(KnownError):
    kind = FailureKind.COLLECTION_TOO_LARGE
    status_code = 413

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            message=f"Collections are limited to {limit} items.",
            detail=f"Received {size} items",
            suggestion="Filter the collection client-side before sending it.",
        )


class UnhandledActionError(KnownError):
    """
    Raised when the reducer receives something outside the closed action set.

    This is a programming error, never a user error.
    """

    kind = FailureKind.INVARIANT_VIOLATION
    status_code = 500

    def __init__(self, action: object):
        self.action = action
        super().__init__(
            message="Received a filter action the reducer does not handle.",
            detail=f"Unhandled action: {type(action).__name__}",
        )
