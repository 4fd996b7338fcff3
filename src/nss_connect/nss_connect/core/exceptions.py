class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    Nothing has been written when this is raised; the caller can fix the input and resubmit.
    """


class DuplicateAttendanceError(ValidationError):
    """Raised when a volunteer already has an attendance record for the event."""


class LedgerTransactionError(DomainError):
    """Raised when a ledger transaction was rolled back.

    The whole operation had no effect and can be retried unchanged.
    """


class AuthenticationError(DomainError):
    """Raised when credentials or a bearer token are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
