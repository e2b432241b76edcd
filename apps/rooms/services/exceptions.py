"""
Domain-specific exceptions for rooms app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class RoomsServiceError(Exception):
    """Base exception for all rooms service errors."""
    pass


class RoomNotFoundError(RoomsServiceError):
    """Raised when a room does not exist or is inaccessible."""
    pass


class InvalidInviteCodeError(RoomsServiceError):
    """Raised when an invite code does not match any room."""
    pass


class AlreadyMemberError(RoomsServiceError):
    """Raised when a user tries to join a room they're already in."""
    pass


class InsufficientPermissionsError(RoomsServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass
