"""
Ledger App - Room Fund Transactions

Records member contributions and reimbursement requests against a room's
shared fund, lets the room admin approve or reject them, and keeps a
per-room fund snapshot in sync with the confirmed transactions.

Key Features:
- Contribution and reimbursement submission (PENDING until reviewed)
- Admin resolution via conditional status updates (resolves exactly once)
- Reimbursement payouts recorded as linked REIMBURSEMENT_PAYMENT rows
- Full fund recomputation from confirmed transactions on every change
- UPI deep links and QR codes for paying contributions and payouts

Architecture:
- Models: Transaction, FundSnapshot
- Services: transaction_submission, transaction_resolution,
  reconciliation, fund_snapshot, payment_links
- Views: TransactionViewSet nested under /api/rooms/{room_id}/
"""
