"""Room lookups and role checks shared by the ledger services."""

from uuid import UUID

from apps.accounts.models import User
from apps.rooms.models import Room

from .exceptions import AccessDeniedError, RoomNotFoundError


def get_room(*, room_id: UUID) -> Room:
    try:
        return Room.objects.get(id=room_id)
    except Room.DoesNotExist:
        raise RoomNotFoundError(f"Room with ID {room_id} not found")


def require_member(room: Room, user: User) -> None:
    # The admin is always a member, even if the membership row went missing
    if room.is_admin(user) or room.has_member(user):
        return
    raise AccessDeniedError("Access denied - not a room member")


def require_admin(room: Room, user: User) -> None:
    if not room.is_admin(user):
        raise AccessDeniedError("Access denied - only the room admin can perform this action")
