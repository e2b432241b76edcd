"""Fund snapshot reads."""

from uuid import UUID

from django.db import DatabaseError

from apps.accounts.models import User

from ..models import FundSnapshot
from .access import get_room, require_member
from .exceptions import StoreFailureError
from .reconciliation import recompute_fund


def get_fund_snapshot(*, room_id: UUID) -> FundSnapshot:
    """
    Return a room's fund snapshot, computing it on first access.

    Rooms do not get a snapshot at creation time. The first read builds
    one from the confirmed transactions and persists it.

    Raises:
        RoomNotFoundError: If room doesn't exist
        StoreFailureError: If the snapshot cannot be read or built
    """
    room = get_room(room_id=room_id)

    try:
        return FundSnapshot.objects.get(room_id=room.id)
    except FundSnapshot.DoesNotExist:
        return recompute_fund(room_id=room.id)
    except DatabaseError as e:
        raise StoreFailureError(f"Could not read fund snapshot for room {room.id}") from e


def get_room_fund(*, room_id: UUID, user: User) -> FundSnapshot:
    """
    Member-facing fund read.

    Raises:
        RoomNotFoundError: If room doesn't exist
        AccessDeniedError: If user is not a room member
        StoreFailureError: If the snapshot cannot be read or built
    """
    room = get_room(room_id=room_id)
    require_member(room, user)
    return get_fund_snapshot(room_id=room.id)
