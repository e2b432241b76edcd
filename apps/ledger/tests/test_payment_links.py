import pytest
from decimal import Decimal
from django.test import override_settings
from django.urls import reverse
from rest_framework import status

from apps.ledger.models import TransactionStatus, TransactionType
from apps.ledger.services import UPIPaymentLinkGenerator, get_payment_link
from apps.ledger.services.exceptions import (
    AccessDeniedError,
    InvalidStateTransitionError,
    TransactionValidationError,
)


class TestUPIPaymentLinkGenerator:
    """Tests for the deep link format (no database)."""

    def test_generate_upi_url(self):
        url = UPIPaymentLinkGenerator.generate_upi_url(
            payee_upi_id='admin@okbank',
            amount=Decimal('250'),
            payee_name='Flat 42',
            note='Room: Flat 42 - Groceries & milk',
            currency='INR',
        )

        assert url == (
            'upi://pay?pa=admin@okbank&pn=Flat%2042&am=250.00&cu=INR'
            '&tn=Room%3A%20Flat%2042%20-%20Groceries%20%26%20milk'
        )

    @override_settings(PAYMENT_CURRENCY='USD')
    def test_currency_from_settings(self):
        url = UPIPaymentLinkGenerator.generate_upi_url(payee_upi_id='a@b', amount='1')

        assert '&cu=USD&' in url

    def test_generate_qr_image_is_png(self):
        png = UPIPaymentLinkGenerator.generate_qr_image('upi://pay?pa=a@b&am=1.00')

        assert png.startswith(b'\x89PNG')


@pytest.mark.django_db
class TestGetPaymentLink:
    """Tests for get_payment_link."""

    def test_contribution_link(self, room, room_member, pending_contribution):
        link = get_payment_link(room_id=room.id, transaction_id=pending_contribution.id, user=room_member)

        assert link['payee_upi_id'] == 'admin@okbank'
        assert link['payee_name'] == 'Flat 42'
        assert link['amount'] == Decimal('500.00')
        assert link['note'] == 'Room: Flat 42 - March share'
        assert link['upi_url'].startswith('upi://pay?pa=admin@okbank&pn=Flat%2042&am=500.00&cu=INR&tn=')

    def test_payout_link_uses_query_upi_id(self, room, room_admin, confirmed_reimbursement):
        link = get_payment_link(
            room_id=room.id,
            transaction_id=confirmed_reimbursement.id,
            user=room_admin,
            member_upi_id='asha@okbank',
        )

        assert link['payee_upi_id'] == 'asha@okbank'
        assert link['payee_name'] == 'Asha'
        assert link['note'] == 'Reimbursement for Groceries'

    def test_payout_link_prefers_recorded_upi_id(self, room, room_admin, make_transaction):
        paid = make_transaction(
            type=TransactionType.REIMBURSEMENT,
            status=TransactionStatus.CONFIRMED,
            reimbursed=True,
            member_upi_id='recorded@okbank',
        )

        link = get_payment_link(
            room_id=room.id,
            transaction_id=paid.id,
            user=room_admin,
            member_upi_id='other@okbank',
        )

        assert link['payee_upi_id'] == 'recorded@okbank'

    def test_payout_link_requires_upi_id(self, room, room_admin, confirmed_reimbursement):
        with pytest.raises(TransactionValidationError):
            get_payment_link(room_id=room.id, transaction_id=confirmed_reimbursement.id, user=room_admin)

    def test_payout_link_admin_only(self, room, room_member, confirmed_reimbursement):
        with pytest.raises(AccessDeniedError):
            get_payment_link(
                room_id=room.id,
                transaction_id=confirmed_reimbursement.id,
                user=room_member,
                member_upi_id='asha@okbank',
            )

    def test_payout_link_needs_confirmation(self, room, room_admin, pending_reimbursement):
        with pytest.raises(InvalidStateTransitionError):
            get_payment_link(
                room_id=room.id,
                transaction_id=pending_reimbursement.id,
                user=room_admin,
                member_upi_id='asha@okbank',
            )

    def test_payment_record_has_no_link(self, room, room_admin, make_transaction):
        payment = make_transaction(
            type=TransactionType.REIMBURSEMENT_PAYMENT,
            status=TransactionStatus.CONFIRMED,
        )

        with pytest.raises(TransactionValidationError):
            get_payment_link(room_id=room.id, transaction_id=payment.id, user=room_admin)


@pytest.mark.django_db
class TestPaymentLinkEndpoints:
    """Tests for payment_link/ and qr_code/ actions."""

    def test_payment_link(self, member_client, room, pending_contribution):
        response = member_client.get(reverse(
            'ledger:transaction-payment-link',
            kwargs={'room_id': room.id, 'pk': pending_contribution.id}
        ))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['upi_url'].startswith('upi://pay?')
        assert response.data['amount'] == '500.00'
        assert response.data['currency'] == 'INR'

    def test_payout_link_with_query_param(self, admin_client, room, confirmed_reimbursement):
        response = admin_client.get(
            reverse(
                'ledger:transaction-payment-link',
                kwargs={'room_id': room.id, 'pk': confirmed_reimbursement.id}
            ),
            {'member_upi_id': 'asha@okbank'}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['payee_upi_id'] == 'asha@okbank'

    def test_qr_code(self, member_client, room, pending_contribution):
        response = member_client.get(reverse(
            'ledger:transaction-qr-code',
            kwargs={'room_id': room.id, 'pk': pending_contribution.id}
        ))

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'image/png'
        assert response.content.startswith(b'\x89PNG')

    def test_qr_code_outsider(self, outsider_client, room, pending_contribution):
        response = outsider_client.get(reverse(
            'ledger:transaction-qr-code',
            kwargs={'room_id': room.id, 'pk': pending_contribution.id}
        ))

        assert response.status_code == status.HTTP_403_FORBIDDEN
