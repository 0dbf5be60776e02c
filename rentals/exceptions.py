"""Custom exception hierarchy for rentals."""


class RentalsError(Exception):
    """Base exception for all rentals errors."""


class EntityNotFoundError(RentalsError):
    """Raised when a referenced entity does not exist."""


class InvalidEntityStateError(RentalsError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(RentalsError):
    """Raised when configuration is invalid or missing."""


class ValidationError(RentalsError):
    """Raised when an application draft fails validation.

    The ``errors`` mapping holds one message per violated field.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(f"{len(errors)} field(s) failed validation: {', '.join(sorted(errors))}")
        self.errors = dict(errors)


class StoreError(RentalsError):
    """Raised when a document store operation fails."""

    code = "unknown"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class PermissionDeniedError(StoreError):
    """Raised when the store refuses access to a collection."""

    code = "permission-denied"


class StoreUnavailableError(StoreError):
    """Raised when the store cannot be reached."""

    code = "unavailable"


class DocumentNotFoundError(StoreError):
    """Raised when the target document or collection does not exist."""

    code = "not-found"


class FailedPreconditionError(StoreError):
    """Raised when a conditional update finds unexpected field values."""

    code = "failed-precondition"
