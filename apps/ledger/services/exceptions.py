"""
Domain exceptions for the ledger app.

Every error carries a stable ``code`` and the HTTP ``status_code`` views
answer with, so callers can branch on the kind of failure rather than on
message text.
"""


class LedgerServiceError(Exception):
    """Base exception for ledger service errors."""
    code = 'ledger_error'
    status_code = 400


class TransactionValidationError(LedgerServiceError):
    """Malformed or missing input (e.g. non-positive amount, missing UPI ID)."""
    code = 'validation_error'
    status_code = 400


class AccessDeniedError(LedgerServiceError):
    """Caller lacks room membership or the admin role."""
    code = 'access_denied'
    status_code = 403


class RoomNotFoundError(LedgerServiceError):
    """Room does not exist."""
    code = 'not_found'
    status_code = 404


class TransactionNotFoundError(LedgerServiceError):
    """Transaction does not exist in the given room."""
    code = 'not_found'
    status_code = 404


class InvalidStateTransitionError(LedgerServiceError):
    """Transaction is not in the state the operation requires."""
    code = 'invalid_state'
    status_code = 409


class StoreFailureError(LedgerServiceError):
    """Underlying persistence layer failed."""
    code = 'store_failure'
    status_code = 503
