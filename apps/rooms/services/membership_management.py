"""
Membership management service.

Handles joining rooms by invite code with concurrency protection.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.rooms.models import Room, RoomMembership, RoomRole

from .exceptions import (
    RoomNotFoundError,
    InvalidInviteCodeError,
    AlreadyMemberError,
)

logger = logging.getLogger(__name__)


def get_room_by_invite_code(*, invite_code: str) -> Room:
    """
    Look up the room an invite code points to.

    Raises:
        InvalidInviteCodeError: If no room uses this code
    """
    try:
        return Room.objects.select_related('admin').get(invite_code=invite_code)
    except Room.DoesNotExist:
        raise InvalidInviteCodeError("Invalid invite code")


@transaction.atomic
def join_room(*, invite_code: str, user: User) -> RoomMembership:
    """
    Join a room using its invite code.

    Locks the room row so the membership check and insert are serialized.

    Args:
        invite_code: Invite code shared by the room admin
        user: User joining the room

    Returns:
        Created RoomMembership instance

    Raises:
        InvalidInviteCodeError: If invite code is unknown
        AlreadyMemberError: If user is already a member
    """
    try:
        room = (
            Room.objects
            .select_for_update()
            .get(invite_code=invite_code)
        )
    except Room.DoesNotExist:
        raise InvalidInviteCodeError("Invalid invite code")

    if room.has_member(user):
        raise AlreadyMemberError(f"User is already a member of {room.name}")

    try:
        with transaction.atomic():
            membership = RoomMembership.objects.create(
                user=user,
                room=room,
                role=RoomRole.MEMBER
            )
    except IntegrityError:
        raise AlreadyMemberError(f"User is already a member of {room.name}")

    logger.info("User %s joined room %s", user.id, room.id)
    return membership


def get_room_members(*, room_id: UUID) -> QuerySet[RoomMembership]:
    """
    Get all members of a room, admin first.

    Raises:
        RoomNotFoundError: If room doesn't exist
    """
    if not Room.objects.filter(id=room_id).exists():
        raise RoomNotFoundError(f"Room with ID {room_id} not found")

    return (
        RoomMembership.objects
        .filter(room_id=room_id)
        .select_related('user')
        .order_by('role', 'joined_at')
    )
