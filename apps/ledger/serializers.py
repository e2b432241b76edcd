from decimal import Decimal

from rest_framework import serializers

from apps.rooms.serializers import UserMinimalSerializer

from .models import Transaction, FundSnapshot, TransactionStatus, TransactionType


# =============================================================================
# Input Serializers
# =============================================================================

class ContributionInputSerializer(serializers.Serializer):
    """
    Validate input for submitting a contribution.

    Fields:
        amount (Decimal): Amount paid to the room admin
        notes (str): Optional note, defaults to "Fund contribution"
    """

    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.01')
    )
    notes = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class ReimbursementInputSerializer(serializers.Serializer):
    """
    Validate input for a reimbursement claim.

    Fields:
        amount (Decimal): Amount spent on behalf of the room
        notes (str): What the money was spent on
        merchant_upi_id (str): UPI ID of the merchant that was paid
        reference_id (str): Optional UPI transaction reference
    """

    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.01')
    )
    notes = serializers.CharField(max_length=500)
    merchant_upi_id = serializers.CharField(max_length=100)
    reference_id = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')


class ResolveTransactionInputSerializer(serializers.Serializer):
    """Validate the admin's decision on a pending transaction."""

    decision = serializers.ChoiceField(
        choices=[
            (TransactionStatus.CONFIRMED, 'Confirmed'),
            (TransactionStatus.REJECTED, 'Rejected'),
        ]
    )


class MarkReimbursedInputSerializer(serializers.Serializer):
    """Validate input for recording a reimbursement payout."""

    member_upi_id = serializers.CharField(max_length=100)


class TransactionFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for transaction filtering.

    Query Parameters:
        status (str): Filter by status
        type (str): Filter by transaction type
    """

    status = serializers.ChoiceField(choices=TransactionStatus.choices, required=False)
    type = serializers.ChoiceField(choices=TransactionType.choices, required=False)


class PaymentLinkQuerySerializer(serializers.Serializer):
    """Optional member UPI ID for payout links of not-yet-paid claims."""

    member_upi_id = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')


# =============================================================================
# Output Serializers
# =============================================================================

class TransactionSerializer(serializers.ModelSerializer):
    """Read representation of a transaction."""

    user = UserMinimalSerializer(read_only=True)
    resolved_by = UserMinimalSerializer(read_only=True)
    reimbursed_by = UserMinimalSerializer(read_only=True)
    reference_transaction = serializers.PrimaryKeyRelatedField(read_only=True)
    awaiting_payout = serializers.BooleanField(read_only=True)

    class Meta:
        model = Transaction
        fields = [
            'id',
            'room',
            'user',
            'type',
            'amount',
            'status',
            'notes',
            'merchant_upi_id',
            'admin_upi_id',
            'reference_id',
            'resolved_by',
            'resolved_at',
            'reimbursed',
            'reimbursed_at',
            'reimbursed_by',
            'member_upi_id',
            'reference_transaction',
            'awaiting_payout',
            'transaction_date',
            'updated_at',
        ]
        read_only_fields = fields


class FundSnapshotSerializer(serializers.ModelSerializer):
    """Room fund totals."""

    class Meta:
        model = FundSnapshot
        fields = [
            'room',
            'total_contributions',
            'total_reimbursements',
            'current_balance',
            'updated_at',
        ]
        read_only_fields = fields


class MarkReimbursedResponseSerializer(serializers.Serializer):
    """Payout result: the settled claim and the payment record."""

    original = TransactionSerializer()
    payment = TransactionSerializer()


class PaymentLinkSerializer(serializers.Serializer):
    """UPI deep link and its fields."""

    upi_url = serializers.CharField()
    payee_upi_id = serializers.CharField()
    payee_name = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()
    note = serializers.CharField()
