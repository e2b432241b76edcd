"""
Ledger reconciliation.

A room's fund totals are never patched incrementally. Every change that
can affect them triggers a full recomputation over the room's confirmed
transactions, and the result overwrites the room's FundSnapshot. That costs
one scan per mutation and in return the snapshot can never drift from the
transaction set. Rooms hold few transactions, so the scan is cheap.

Counting rules:
    - only CONFIRMED transactions count;
    - CONTRIBUTION adds to ``total_contributions``;
    - REIMBURSEMENT_PAYMENT adds to ``total_reimbursements``;
    - REIMBURSEMENT adds to ``total_reimbursements`` only until it is paid
      out. From then on its linked REIMBURSEMENT_PAYMENT is counted instead,
      so every approved claim is counted exactly once.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from django.db import DatabaseError

from ..models import FundSnapshot, Transaction, TransactionStatus, TransactionType
from .exceptions import StoreFailureError

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')


def calculate_fund_totals(transactions: Iterable[Transaction]) -> dict:
    """
    Sum a collection of transactions into fund totals.

    Pure function: no database access. Amounts are summed as Decimals so
    no binary floating point drift creeps in.

    Args:
        transactions: Any iterable of Transaction-like objects exposing
            ``type``, ``status``, ``amount`` and ``reimbursed``.

    Returns:
        dict with ``total_contributions``, ``total_reimbursements`` and
        ``current_balance`` (all Decimal).

    Example:
        >>> calculate_fund_totals([
        ...     Transaction(type='CONTRIBUTION', status='CONFIRMED', amount=Decimal('500.00')),
        ...     Transaction(type='REIMBURSEMENT', status='CONFIRMED', amount=Decimal('200.00')),
        ... ])
        {'total_contributions': Decimal('500.00'), 'total_reimbursements': Decimal('200.00'),
         'current_balance': Decimal('300.00')}
    """
    total_contributions = ZERO
    total_reimbursements = ZERO

    for tx in transactions:
        if tx.status != TransactionStatus.CONFIRMED:
            continue

        amount = Decimal(tx.amount)

        if tx.type == TransactionType.CONTRIBUTION:
            total_contributions += amount
        elif tx.type == TransactionType.REIMBURSEMENT_PAYMENT:
            total_reimbursements += amount
        elif tx.type == TransactionType.REIMBURSEMENT and not tx.reimbursed:
            total_reimbursements += amount

    return {
        'total_contributions': total_contributions,
        'total_reimbursements': total_reimbursements,
        'current_balance': total_contributions - total_reimbursements,
    }


def _load_confirmed_transactions(room_id: UUID) -> list:
    return list(
        Transaction.objects
        .filter(room_id=room_id, status=TransactionStatus.CONFIRMED)
        .only('type', 'status', 'amount', 'reimbursed')
    )


def recompute_fund(*, room_id: UUID) -> FundSnapshot:
    """
    Rebuild a room's FundSnapshot from its confirmed transactions.

    The snapshot is created or overwritten as a whole. Concurrent calls for
    the same room each read the full current set, and the last writer wins.

    Args:
        room_id: Room UUID

    Returns:
        The saved FundSnapshot

    Raises:
        StoreFailureError: If the transactions cannot be read (the previous
            snapshot is left untouched) or the snapshot cannot be written.
    """
    try:
        transactions = _load_confirmed_transactions(room_id)
    except DatabaseError as e:
        raise StoreFailureError(f"Could not read transactions for room {room_id}") from e

    totals = calculate_fund_totals(transactions)

    try:
        snapshot, _ = FundSnapshot.objects.update_or_create(
            room_id=room_id,
            defaults=totals,
        )
    except DatabaseError as e:
        raise StoreFailureError(f"Could not save fund snapshot for room {room_id}") from e

    logger.info(
        "Room %s fund recomputed: contributions=%s reimbursements=%s balance=%s",
        room_id,
        totals['total_contributions'],
        totals['total_reimbursements'],
        totals['current_balance'],
    )
    return snapshot


def refresh_fund_after_change(room_id: UUID) -> Optional[FundSnapshot]:
    """
    Recompute after a status change without failing the caller.

    The status change has already been committed by the time this runs.
    If reconciliation fails, the snapshot stays stale until the next
    successful recompute and the failure is only logged.
    """
    try:
        return recompute_fund(room_id=room_id)
    except StoreFailureError:
        logger.exception("Fund reconciliation failed for room %s; snapshot left stale", room_id)
        return None
