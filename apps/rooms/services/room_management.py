"""
Room management service.

Handles room creation and invite codes with proper transaction safety.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.rooms.models import Room, RoomMembership, RoomRole, generate_invite_code

from .exceptions import (
    RoomNotFoundError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def create_room(
    *,
    name: str,
    admin: User,
    admin_upi_id: str,
    description: str = '',
    max_retries: int = 5
) -> Room:
    """
    Create a new room and add the creator as its admin member.

    Each attempt runs in its own transaction:
    1. Generate invite code
    2. Create the room
    3. Create admin membership

    The fund snapshot is not created here; it materializes on first read.

    Args:
        name: Room name
        admin: User who will administer the room
        admin_upi_id: UPI ID that receives contributions
        description: Optional room description
        max_retries: Maximum attempts to generate unique invite code

    Returns:
        Created Room instance

    Raises:
        RuntimeError: If cannot generate unique invite code after retries
    """
    for attempt in range(max_retries):
        invite_code = generate_invite_code()

        try:
            with transaction.atomic():
                room = Room.objects.create(
                    name=name.strip(),
                    description=description.strip(),
                    admin=admin,
                    admin_upi_id=admin_upi_id.strip(),
                    invite_code=invite_code
                )

                RoomMembership.objects.create(
                    user=admin,
                    room=room,
                    role=RoomRole.ADMIN
                )

            logger.info("Room %s created by %s", room.id, admin.id)
            return room

        except IntegrityError:
            # Invite code collision
            if attempt == max_retries - 1:
                raise RuntimeError(
                    f"Failed to generate unique invite code after {max_retries} attempts"
                )
            continue

    raise RuntimeError("Unexpected error in room creation")


@transaction.atomic
def regenerate_invite_code(
    *,
    room_id: UUID,
    user: User,
    max_retries: int = 5
) -> str:
    """
    Regenerate a room's invite code (admin only).

    Uses row-level locking; each attempt is a savepoint so a collision
    does not poison the outer transaction.

    Raises:
        RoomNotFoundError: If room doesn't exist
        InsufficientPermissionsError: If user is not the room admin
        RuntimeError: If cannot generate unique code after retries
    """
    try:
        room = (
            Room.objects
            .select_for_update()
            .get(id=room_id)
        )
    except Room.DoesNotExist:
        raise RoomNotFoundError(f"Room with ID {room_id} not found")

    if not room.is_admin(user):
        raise InsufficientPermissionsError("Only the room admin can regenerate invite codes")

    for attempt in range(max_retries):
        new_code = generate_invite_code()

        try:
            with transaction.atomic():
                room.invite_code = new_code
                room.save(update_fields=['invite_code', 'updated_at'])
            return new_code
        except IntegrityError:
            if attempt == max_retries - 1:
                raise RuntimeError(
                    f"Failed to generate unique invite code after {max_retries} attempts"
                )
            continue

    raise RuntimeError("Unexpected error in invite code generation")
