import pytest
from decimal import Decimal

from apps.ledger.serializers import (
    ContributionInputSerializer,
    ReimbursementInputSerializer,
    ResolveTransactionInputSerializer,
    MarkReimbursedInputSerializer,
    TransactionFilterSerializer,
    TransactionSerializer,
    FundSnapshotSerializer,
)
from apps.ledger.models import FundSnapshot


class TestContributionInputSerializer:

    def test_valid(self):
        serializer = ContributionInputSerializer(data={'amount': '99.90'})

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data['amount'] == Decimal('99.90')
        assert serializer.validated_data['notes'] == ''

    @pytest.mark.parametrize('amount', ['0.00', '-10', '0.001', '10000000000.00', ''])
    def test_invalid_amount(self, amount):
        serializer = ContributionInputSerializer(data={'amount': amount})

        assert not serializer.is_valid()
        assert 'amount' in serializer.errors


class TestReimbursementInputSerializer:

    def test_valid(self):
        serializer = ReimbursementInputSerializer(data={
            'amount': '12.00',
            'notes': 'Milk',
            'merchant_upi_id': 'dairy@okbank',
        })

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data['reference_id'] == ''

    def test_notes_and_merchant_required(self):
        serializer = ReimbursementInputSerializer(data={'amount': '12.00'})

        assert not serializer.is_valid()
        assert 'notes' in serializer.errors
        assert 'merchant_upi_id' in serializer.errors


class TestResolveTransactionInputSerializer:

    @pytest.mark.parametrize('decision', ['CONFIRMED', 'REJECTED'])
    def test_valid(self, decision):
        serializer = ResolveTransactionInputSerializer(data={'decision': decision})

        assert serializer.is_valid(), serializer.errors

    @pytest.mark.parametrize('decision', ['PENDING', 'confirmed', ''])
    def test_invalid(self, decision):
        serializer = ResolveTransactionInputSerializer(data={'decision': decision})

        assert not serializer.is_valid()


class TestOtherInputSerializers:

    def test_mark_reimbursed_requires_upi_id(self):
        assert not MarkReimbursedInputSerializer(data={'member_upi_id': ''}).is_valid()
        assert MarkReimbursedInputSerializer(data={'member_upi_id': 'asha@okbank'}).is_valid()

    def test_filter_accepts_empty(self):
        serializer = TransactionFilterSerializer(data={})

        assert serializer.is_valid()
        assert serializer.validated_data == {}

    def test_filter_rejects_unknown_type(self):
        assert not TransactionFilterSerializer(data={'type': 'REFUND'}).is_valid()


@pytest.mark.django_db
class TestOutputSerializers:

    def test_transaction_serializer(self, confirmed_reimbursement, room_member):
        data = TransactionSerializer(confirmed_reimbursement).data

        assert data['amount'] == '200.00'
        assert data['user']['display_name'] == 'Asha'
        assert data['awaiting_payout'] is True
        assert data['resolved_by'] is None

    def test_fund_snapshot_serializer(self, room):
        snapshot = FundSnapshot.objects.create(
            room=room,
            total_contributions=Decimal('10.00'),
            total_reimbursements=Decimal('12.50'),
            current_balance=Decimal('-2.50'),
        )

        data = FundSnapshotSerializer(snapshot).data

        assert data['current_balance'] == '-2.50'
        assert data['room'] == room.id
