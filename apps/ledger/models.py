from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class TransactionType(models.TextChoices):
    CONTRIBUTION = 'CONTRIBUTION', 'Contribution'
    REIMBURSEMENT = 'REIMBURSEMENT', 'Reimbursement'
    REIMBURSEMENT_PAYMENT = 'REIMBURSEMENT_PAYMENT', 'Reimbursement payment'


class TransactionStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    CONFIRMED = 'CONFIRMED', 'Confirmed'
    REJECTED = 'REJECTED', 'Rejected'


class Transaction(models.Model):
    """Money moving into or out of a room's fund."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    room = models.ForeignKey(
        'rooms.Room',
        on_delete=models.CASCADE,
        related_name='transactions'
    )
    # Submitting member (for payouts: the member being paid)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='room_transactions'
    )

    type = models.CharField(max_length=32, choices=TransactionType.choices)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    status = models.CharField(
        max_length=16,
        choices=TransactionStatus.choices,
        default=TransactionStatus.PENDING
    )

    notes = models.TextField(blank=True)

    # UPI attestation strings (never verified)
    merchant_upi_id = models.CharField(max_length=100, blank=True)
    admin_upi_id = models.CharField(max_length=100, blank=True)
    reference_id = models.CharField(max_length=100, blank=True)

    # Admin decision
    resolved_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='resolved_transactions'
    )
    resolved_at = models.DateTimeField(null=True, blank=True)

    # Payout of a confirmed reimbursement
    reimbursed = models.BooleanField(default=False)
    reimbursed_at = models.DateTimeField(null=True, blank=True)
    reimbursed_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reimbursements_paid'
    )
    member_upi_id = models.CharField(max_length=100, blank=True)
    reference_transaction = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='payments'
    )

    transaction_date = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'transactions'
        indexes = [
            models.Index(fields=['room', 'status'], name='transaction_room_id_status_idx'),
            models.Index(fields=['room', 'transaction_date'], name='transaction_room_id_date_idx'),
            models.Index(fields=['user', 'transaction_date'], name='transaction_user_id_date_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name='transaction_amount_positive',
            ),
            models.UniqueConstraint(
                fields=['reference_transaction'],
                condition=models.Q(type='REIMBURSEMENT_PAYMENT'),
                name='unique_payment_per_reimbursement',
            ),
        ]
        ordering = ['-transaction_date']

    def __str__(self):
        return f"{self.get_type_display()} of {self.amount} ({self.status})"

    @property
    def awaiting_payout(self):
        """Confirmed reimbursement that has not been paid out yet."""
        return (
            self.type == TransactionType.REIMBURSEMENT
            and self.status == TransactionStatus.CONFIRMED
            and not self.reimbursed
        )


class FundSnapshot(models.Model):
    """Denormalized fund totals for a room, rebuilt from confirmed transactions."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    room = models.OneToOneField(
        'rooms.Room',
        on_delete=models.CASCADE,
        related_name='fund'
    )

    total_contributions = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00')
    )
    total_reimbursements = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00')
    )
    # May go negative when approved claims exceed contributions
    current_balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00')
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'room_funds'

    def __str__(self):
        return f"{self.room.name}: balance {self.current_balance}"
