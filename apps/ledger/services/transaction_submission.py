"""
Transaction submission.

Members submit contributions and reimbursement claims. Both start out
PENDING and wait for the room admin's decision; submission never touches
the fund snapshot.
"""

import logging
from decimal import Decimal, InvalidOperation
from uuid import UUID

from django.db import DatabaseError

from apps.accounts.models import User

from ..models import Transaction, TransactionStatus, TransactionType
from .access import get_room, require_member
from .exceptions import StoreFailureError, TransactionValidationError

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
DEFAULT_CONTRIBUTION_NOTES = 'Fund contribution'


def validate_amount(amount) -> Decimal:
    """
    Coerce an amount to Decimal and check it is a positive money value.

    Raises:
        TransactionValidationError: If the amount is not a number, not
            positive, or has more than two decimal places
    """
    if isinstance(amount, bool):
        raise TransactionValidationError("Amount must be a number")

    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise TransactionValidationError("Amount must be a number")

    if not value.is_finite():
        raise TransactionValidationError("Amount must be a number")
    if value <= 0:
        raise TransactionValidationError("Amount must be greater than zero")
    if value != value.quantize(CENT):
        raise TransactionValidationError("Amount must have at most two decimal places")

    return value.quantize(CENT)


def _create_pending(**fields) -> Transaction:
    try:
        return Transaction.objects.create(status=TransactionStatus.PENDING, **fields)
    except DatabaseError as e:
        raise StoreFailureError("Could not save transaction") from e


def submit_contribution(
    *,
    room_id: UUID,
    user: User,
    amount,
    notes: str = ''
) -> Transaction:
    """
    Record a member's contribution to the room fund.

    The admin's UPI ID at submission time is stored on the transaction as
    the payee, so later edits to the room do not rewrite history.

    Args:
        room_id: Room UUID
        user: Contributing member
        amount: Positive amount with at most two decimal places
        notes: Optional note; defaults to "Fund contribution"

    Returns:
        The new PENDING Transaction

    Raises:
        TransactionValidationError: Bad amount, or room has no admin UPI ID
        RoomNotFoundError: If room doesn't exist
        AccessDeniedError: If user is not a room member
        StoreFailureError: If the transaction cannot be saved
    """
    value = validate_amount(amount)

    room = get_room(room_id=room_id)
    require_member(room, user)

    if not room.admin_upi_id.strip():
        raise TransactionValidationError("Room admin has not configured a UPI ID")

    tx = _create_pending(
        room=room,
        user=user,
        type=TransactionType.CONTRIBUTION,
        amount=value,
        notes=(notes or '').strip() or DEFAULT_CONTRIBUTION_NOTES,
        admin_upi_id=room.admin_upi_id.strip(),
    )

    logger.info("Contribution %s of %s submitted to room %s by %s", tx.id, value, room.id, user.id)
    return tx


def submit_reimbursement(
    *,
    room_id: UUID,
    user: User,
    amount,
    notes: str,
    merchant_upi_id: str,
    reference_id: str = ''
) -> Transaction:
    """
    Record a member's claim for money spent on behalf of the room.

    Args:
        room_id: Room UUID
        user: Claiming member
        amount: Positive amount with at most two decimal places
        notes: What the money was spent on (required)
        merchant_upi_id: UPI ID of the merchant that was paid (required)
        reference_id: Optional UPI transaction reference

    Returns:
        The new PENDING Transaction

    Raises:
        TransactionValidationError: Bad amount, missing notes or merchant UPI ID
        RoomNotFoundError: If room doesn't exist
        AccessDeniedError: If user is not a room member
        StoreFailureError: If the transaction cannot be saved
    """
    value = validate_amount(amount)

    notes = (notes or '').strip()
    merchant_upi_id = (merchant_upi_id or '').strip()
    if not notes:
        raise TransactionValidationError("Notes are required for a reimbursement")
    if not merchant_upi_id:
        raise TransactionValidationError("Merchant UPI ID is required for a reimbursement")

    room = get_room(room_id=room_id)
    require_member(room, user)

    tx = _create_pending(
        room=room,
        user=user,
        type=TransactionType.REIMBURSEMENT,
        amount=value,
        notes=notes,
        merchant_upi_id=merchant_upi_id,
        reference_id=(reference_id or '').strip(),
    )

    logger.info("Reimbursement %s of %s submitted to room %s by %s", tx.id, value, room.id, user.id)
    return tx
