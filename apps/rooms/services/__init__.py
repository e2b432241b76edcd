"""
Rooms app services layer.

Rooms are the member/room directory the ledger consults for membership
and admin checks. All state-changing operations run inside transactions.
"""

from .exceptions import (
    RoomsServiceError,
    RoomNotFoundError,
    InvalidInviteCodeError,
    AlreadyMemberError,
    InsufficientPermissionsError,
)

from .room_management import (
    create_room,
    regenerate_invite_code,
)

from .membership_management import (
    get_room_by_invite_code,
    join_room,
    get_room_members,
)


__all__ = [
    # Exceptions
    'RoomsServiceError',
    'RoomNotFoundError',
    'InvalidInviteCodeError',
    'AlreadyMemberError',
    'InsufficientPermissionsError',

    # Room Management
    'create_room',
    'regenerate_invite_code',

    # Membership Management
    'get_room_by_invite_code',
    'join_room',
    'get_room_members',
]
