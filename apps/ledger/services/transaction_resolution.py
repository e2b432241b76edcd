"""
Transaction resolution and payout.

Status changes are single conditional UPDATEs keyed on the expected prior
state. Whichever admin request lands first wins; the loser matches zero rows
and gets an InvalidStateTransitionError instead of silently overwriting the
first decision.
"""

import logging
from uuid import UUID

from django.db import DatabaseError, transaction
from django.utils import timezone

from apps.accounts.models import User

from ..models import Transaction, TransactionStatus, TransactionType
from .access import get_room, require_admin
from .exceptions import (
    InvalidStateTransitionError,
    StoreFailureError,
    TransactionNotFoundError,
    TransactionValidationError,
)
from .reconciliation import refresh_fund_after_change

logger = logging.getLogger(__name__)

DECISIONS = (TransactionStatus.CONFIRMED, TransactionStatus.REJECTED)


def _diagnose_no_match(*, room_id: UUID, transaction_id: UUID, reason: str):
    """Turn a zero-row conditional update into the right error."""
    try:
        current = (
            Transaction.objects
            .filter(id=transaction_id, room_id=room_id)
            .values('status', 'type', 'reimbursed')
            .first()
        )
    except DatabaseError as e:
        raise StoreFailureError("Could not read transaction") from e

    if current is None:
        raise TransactionNotFoundError(f"Transaction {transaction_id} not found in room {room_id}")

    logger.warning(
        "Rejected transition on transaction %s (status=%s, type=%s, reimbursed=%s): %s",
        transaction_id,
        current['status'],
        current['type'],
        current['reimbursed'],
        reason,
    )
    raise InvalidStateTransitionError(reason)


def _load(transaction_id: UUID) -> Transaction:
    try:
        return Transaction.objects.select_related('user', 'room').get(id=transaction_id)
    except DatabaseError as e:
        raise StoreFailureError("Could not read transaction") from e


def resolve_transaction(
    *,
    room_id: UUID,
    transaction_id: UUID,
    decision: str,
    resolved_by: User
) -> Transaction:
    """
    Confirm or reject a pending transaction (admin only).

    A confirmation recomputes the room fund right after the status write.
    If that recompute fails the confirmation still stands; the failure is
    logged and the snapshot catches up on the next successful recompute.

    Args:
        room_id: Room UUID
        transaction_id: Transaction UUID
        decision: "CONFIRMED" or "REJECTED"
        resolved_by: Admin making the decision

    Returns:
        The updated Transaction

    Raises:
        TransactionValidationError: If decision is not CONFIRMED or REJECTED
        RoomNotFoundError: If room doesn't exist
        AccessDeniedError: If user is not the room admin
        TransactionNotFoundError: If the transaction is not in this room
        InvalidStateTransitionError: If the transaction is no longer PENDING
        StoreFailureError: If the status update fails
    """
    if decision not in DECISIONS:
        raise TransactionValidationError("Decision must be CONFIRMED or REJECTED")

    room = get_room(room_id=room_id)
    require_admin(room, resolved_by)

    now = timezone.now()
    try:
        updated = (
            Transaction.objects
            .filter(id=transaction_id, room_id=room.id, status=TransactionStatus.PENDING)
            .update(
                status=decision,
                resolved_by=resolved_by,
                resolved_at=now,
                updated_at=now,
            )
        )
    except DatabaseError as e:
        raise StoreFailureError("Could not update transaction status") from e

    if updated == 0:
        _diagnose_no_match(
            room_id=room.id,
            transaction_id=transaction_id,
            reason="Transaction has already been resolved",
        )

    logger.info("Transaction %s in room %s marked %s by %s", transaction_id, room.id, decision, resolved_by.id)

    if decision == TransactionStatus.CONFIRMED:
        refresh_fund_after_change(room.id)

    return _load(transaction_id)


def mark_reimbursed(
    *,
    room_id: UUID,
    transaction_id: UUID,
    member_upi_id: str,
    paid_by: User
) -> tuple:
    """
    Record that the admin has paid out a confirmed reimbursement.

    Flags the claim as reimbursed and, in the same database transaction,
    writes a CONFIRMED REIMBURSEMENT_PAYMENT linked to it. A claim can be
    paid out only once.

    Args:
        room_id: Room UUID
        transaction_id: UUID of the confirmed REIMBURSEMENT
        member_upi_id: UPI ID the member was paid at
        paid_by: Admin recording the payout

    Returns:
        tuple: (original reimbursement, new payment transaction)

    Raises:
        TransactionValidationError: If member_upi_id is blank
        RoomNotFoundError: If room doesn't exist
        AccessDeniedError: If user is not the room admin
        TransactionNotFoundError: If the transaction is not in this room
        InvalidStateTransitionError: If it is not a confirmed, unpaid reimbursement
        StoreFailureError: If the payout cannot be saved
    """
    member_upi_id = (member_upi_id or '').strip()
    if not member_upi_id:
        raise TransactionValidationError("Member UPI ID is required")

    room = get_room(room_id=room_id)
    require_admin(room, paid_by)

    now = timezone.now()
    try:
        with transaction.atomic():
            updated = (
                Transaction.objects
                .filter(
                    id=transaction_id,
                    room_id=room.id,
                    type=TransactionType.REIMBURSEMENT,
                    status=TransactionStatus.CONFIRMED,
                    reimbursed=False,
                )
                .update(
                    reimbursed=True,
                    reimbursed_at=now,
                    reimbursed_by=paid_by,
                    member_upi_id=member_upi_id,
                    updated_at=now,
                )
            )

            if updated == 0:
                _diagnose_no_match(
                    room_id=room.id,
                    transaction_id=transaction_id,
                    reason="Only confirmed, unpaid reimbursements can be marked as reimbursed",
                )

            original = Transaction.objects.get(id=transaction_id)
            payment = Transaction.objects.create(
                room=room,
                user=original.user,
                type=TransactionType.REIMBURSEMENT_PAYMENT,
                amount=original.amount,
                status=TransactionStatus.CONFIRMED,
                notes=f"Reimbursement for: {original.notes}",
                member_upi_id=member_upi_id,
                reference_transaction=original,
                resolved_by=paid_by,
                resolved_at=now,
            )
    except DatabaseError as e:
        raise StoreFailureError("Could not record reimbursement payout") from e

    logger.info(
        "Reimbursement %s in room %s paid out as %s by %s",
        transaction_id, room.id, payment.id, paid_by.id,
    )

    refresh_fund_after_change(room.id)

    return original, payment
