"""
Ledger app services layer.

The transaction status machine (submission, resolution, payout), the
reconciler that rebuilds fund totals from confirmed transactions, and the
fund snapshot reads. Views stay thin and call into these functions.
"""

from .exceptions import (
    LedgerServiceError,
    TransactionValidationError,
    AccessDeniedError,
    RoomNotFoundError,
    TransactionNotFoundError,
    InvalidStateTransitionError,
    StoreFailureError,
)

from .transaction_submission import (
    validate_amount,
    submit_contribution,
    submit_reimbursement,
)

from .transaction_resolution import (
    resolve_transaction,
    mark_reimbursed,
)

from .reconciliation import (
    calculate_fund_totals,
    recompute_fund,
    refresh_fund_after_change,
)

from .fund_snapshot import (
    get_fund_snapshot,
    get_room_fund,
)

from .transaction_queries import (
    list_room_transactions,
    list_pending_transactions,
    get_room_transaction,
)

from .payment_links import (
    UPIPaymentLinkGenerator,
    get_payment_link,
)


__all__ = [
    # Exceptions
    'LedgerServiceError',
    'TransactionValidationError',
    'AccessDeniedError',
    'RoomNotFoundError',
    'TransactionNotFoundError',
    'InvalidStateTransitionError',
    'StoreFailureError',

    # Status machine
    'validate_amount',
    'submit_contribution',
    'submit_reimbursement',
    'resolve_transaction',
    'mark_reimbursed',

    # Reconciliation
    'calculate_fund_totals',
    'recompute_fund',
    'refresh_fund_after_change',

    # Fund snapshot
    'get_fund_snapshot',
    'get_room_fund',

    # Queries
    'list_room_transactions',
    'list_pending_transactions',
    'get_room_transaction',

    # Payment links
    'UPIPaymentLinkGenerator',
    'get_payment_link',
]
