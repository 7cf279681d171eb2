"""Service-layer exceptions mapped to HTTP responses in main.py."""

from fastapi import status


class LedgerError(Exception):
    """Base exception for service layer errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(LedgerError):
    """A required field is missing or out of range. Nothing was written."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(LedgerError):
    """Unknown student, subject, grade or payment id."""

    status_code = status.HTTP_404_NOT_FOUND


class UnknownReferenceError(NotFoundError):
    """An enrollment points at a subject or grade that does not exist."""


class ConflictError(LedgerError):
    """Uniqueness conflict that has no domain-level outcome."""

    status_code = status.HTTP_409_CONFLICT


class StorageError(LedgerError):
    """Unexpected storage engine failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
