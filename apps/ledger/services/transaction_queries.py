"""Read-side transaction listings."""

from typing import Optional
from uuid import UUID

from django.db.models import QuerySet

from apps.accounts.models import User

from ..models import Transaction, TransactionStatus
from .access import get_room, require_admin, require_member
from .exceptions import TransactionNotFoundError


def _room_transactions(room_id: UUID) -> QuerySet:
    return (
        Transaction.objects
        .filter(room_id=room_id)
        .select_related('room', 'user', 'resolved_by', 'reimbursed_by', 'reference_transaction')
        .order_by('-transaction_date')
    )


def list_room_transactions(
    *,
    room_id: UUID,
    user: User,
    status: Optional[str] = None,
    type: Optional[str] = None
) -> QuerySet:
    """
    Transactions of a room, newest first (members only).

    Raises:
        RoomNotFoundError: If room doesn't exist
        AccessDeniedError: If user is not a room member
    """
    room = get_room(room_id=room_id)
    require_member(room, user)

    queryset = _room_transactions(room.id)
    if status:
        queryset = queryset.filter(status=status)
    if type:
        queryset = queryset.filter(type=type)
    return queryset


def list_pending_transactions(*, room_id: UUID, user: User) -> QuerySet:
    """
    Transactions awaiting the admin's decision (admin only).

    Raises:
        RoomNotFoundError: If room doesn't exist
        AccessDeniedError: If user is not the room admin
    """
    room = get_room(room_id=room_id)
    require_admin(room, user)
    return _room_transactions(room.id).filter(status=TransactionStatus.PENDING)


def get_room_transaction(*, room_id: UUID, transaction_id: UUID, user: User) -> Transaction:
    """
    Single transaction of a room (members only).

    Raises:
        RoomNotFoundError: If room doesn't exist
        AccessDeniedError: If user is not a room member
        TransactionNotFoundError: If the transaction is not in this room
    """
    room = get_room(room_id=room_id)
    require_member(room, user)
    try:
        return _room_transactions(room.id).get(id=transaction_id)
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError(f"Transaction {transaction_id} not found in room {room.id}")
