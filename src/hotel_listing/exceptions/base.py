"""
Application error taxonomy.

Two tiers:
  - Domain errors (`NotFoundError`, `BadRequestError`): expected outcomes of a
    request, raised by repositories and route handlers when a precondition does
    not hold. Each one knows its HTTP status and its `ErrorType` label.
  - Everything else is unclassified and surfaces as a 500 "Failure". This
    includes `RepositoryError`, the wrapper repositories raise for storage
    faults they could not classify.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ErrorType = Literal["Failure", "Not Found", "Bad Request"]

FAILURE: ErrorType = "Failure"
NOT_FOUND: ErrorType = "Not Found"
BAD_REQUEST: ErrorType = "Bad Request"


class DomainError(Exception):
    """Base class for errors whose HTTP status is known up front."""

    status_code: int = 500
    error_type: ErrorType = FAILURE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def http_status(self) -> int:
        return self.status_code

    def to_details(self) -> "ErrorDetails":
        return ErrorDetails(error_type=self.error_type, error_message=self.message)


class NotFoundError(DomainError):
    """
    A row (or other subject) identified by `key` does not exist.

    `subject` is the entity type name (e.g. "Hotel") or the operation name for
    specialized lookups (e.g. "GetDetails").
    """

    status_code = 404
    error_type = NOT_FOUND

    def __init__(self, subject: str, key: Any):
        super().__init__(f"{subject} ({key}) was not found")
        self.subject = subject
        self.key = key


class BadRequestError(DomainError):
    """The caller supplied input that violates a precondition."""

    status_code = 400
    error_type = BAD_REQUEST

    def __init__(self, message: str, *, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = fields


class RepositoryError(Exception):
    """
    Unclassified storage failure.

    Raised with a safe message (entity name only, never raw driver text); the
    original exception is chained as `__cause__` for the logs.
    """

    def __init__(self, message: str, *, model: str | None = None):
        super().__init__(message)
        self.message = message
        self.model = model


class ErrorDetails(BaseModel):
    """
    Response body for every translated failure:

        {"ErrorType": "Not Found", "ErrorMessage": "Hotel (7) was not found"}
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    error_type: ErrorType = Field(alias="ErrorType")
    error_message: str = Field(alias="ErrorMessage")

    def to_json(self) -> str:
        # compact, single-line JSON with the PascalCase wire keys
        return self.model_dump_json(by_alias=True)


__all__ = [
    "ErrorType",
    "FAILURE",
    "NOT_FOUND",
    "BAD_REQUEST",
    "DomainError",
    "NotFoundError",
    "BadRequestError",
    "RepositoryError",
    "ErrorDetails",
]
