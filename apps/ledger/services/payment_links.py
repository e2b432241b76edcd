"""
UPI payment links.

Members pay the room admin, and the admin pays members back, outside the
application in any UPI app. This module builds the ``upi://pay`` deep links
(and QR codes of them) that pre-fill those payments. Nothing here moves
money or verifies that a payment happened.

Classes:
    UPIPaymentLinkGenerator: Builds UPI deep links and QR images.

Example:
    Link for a pending contribution::

        from apps.ledger.services import get_payment_link

        link = get_payment_link(
            room_id=room.id,
            transaction_id=contribution.id,
            user=request.user,
        )
        # link['upi_url'] == 'upi://pay?pa=admin%40okbank&pn=Flat%2042&am=500.00&cu=INR&tn=...'
"""

from decimal import Decimal
from io import BytesIO
from urllib.parse import quote
from uuid import UUID

from django.conf import settings

from apps.accounts.models import User

from ..models import TransactionStatus, TransactionType
from .exceptions import (
    InvalidStateTransitionError,
    TransactionValidationError,
)
from .access import require_admin
from .transaction_queries import get_room_transaction


class UPIPaymentLinkGenerator:
    """
    Generate UPI deep links for room payments.

    Format::

        upi://pay?pa=<vpa>&pn=<payee name>&am=<amount>&cu=<currency>&tn=<note>

    Fields:
        - pa: Payee virtual payment address (UPI ID)
        - pn: Payee name shown in the UPI app
        - am: Amount with two decimal places
        - cu: Currency code (``settings.PAYMENT_CURRENCY``, INR by default)
        - tn: Transaction note

    Methods:
        generate_upi_url: Build a deep link from its parts.
        generate_qr_image: Render any payment string as a QR code.
        for_contribution: Link paying a contribution to the room admin.
        for_reimbursement_payout: Link paying a member back.

    Note:
        QR rendering requires the ``qrcode`` library with PIL support.
    """

    @staticmethod
    def generate_upi_url(payee_upi_id, amount, payee_name='', note='', currency=None):
        """
        Build a ``upi://pay`` deep link.

        Args:
            payee_upi_id (str): UPI ID receiving the money.
            amount (Decimal): Amount to pay.
            payee_name (str, optional): Name shown to the payer.
            note (str, optional): Transaction note.
            currency (str, optional): Currency code. Defaults to
                ``settings.PAYMENT_CURRENCY``.

        Returns:
            str: The deep link.

        Example:
            >>> UPIPaymentLinkGenerator.generate_upi_url(
            ...     payee_upi_id='admin@okbank',
            ...     amount=Decimal('250'),
            ...     payee_name='Flat 42',
            ...     note='Groceries',
            ... )
            'upi://pay?pa=admin@okbank&pn=Flat%2042&am=250.00&cu=INR&tn=Groceries'
        """
        if currency is None:
            currency = getattr(settings, 'PAYMENT_CURRENCY', 'INR')

        parts = [
            f'pa={quote(payee_upi_id.strip(), safe="@.-_")}',
            f'pn={quote(payee_name)}',
            f'am={Decimal(amount):.2f}',
            f'cu={quote(currency)}',
            f'tn={quote(note)}',
        ]
        return 'upi://pay?' + '&'.join(parts)

    @staticmethod
    def generate_qr_image(payment_string):
        """
        Render a payment string as a PNG QR code.

        Args:
            payment_string (str): Usually a UPI deep link.

        Returns:
            bytes: PNG image data.

        Note:
            Error correction level M (15% recovery) keeps the code small
            enough for phone cameras while tolerating print smudges.
        """
        import qrcode

        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(payment_string)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffer = BytesIO()
        img.save(buffer, format='PNG')
        return buffer.getvalue()

    @staticmethod
    def for_contribution(transaction):
        """
        Link paying a contribution to the room admin.

        The payee is the admin UPI ID recorded on the contribution when it
        was submitted, falling back to the room's current one.

        Returns:
            dict: ``upi_url`` plus the individual fields.
        """
        room = transaction.room
        payee_upi_id = transaction.admin_upi_id or room.admin_upi_id
        payee_name = room.name or 'Room Fund'
        note = f"Room: {room.name} - {transaction.notes or 'Fund contribution'}"

        return UPIPaymentLinkGenerator._link(payee_upi_id, payee_name, transaction.amount, note)

    @staticmethod
    def for_reimbursement_payout(transaction, member_upi_id):
        """
        Link paying a member back for a confirmed reimbursement.

        Returns:
            dict: ``upi_url`` plus the individual fields.
        """
        payee_name = transaction.user.get_display_name() or 'Member'
        note = f"Reimbursement for {transaction.notes or 'Room Expense'}"

        return UPIPaymentLinkGenerator._link(member_upi_id, payee_name, transaction.amount, note)

    @staticmethod
    def _link(payee_upi_id, payee_name, amount, note):
        currency = getattr(settings, 'PAYMENT_CURRENCY', 'INR')
        return {
            'upi_url': UPIPaymentLinkGenerator.generate_upi_url(
                payee_upi_id=payee_upi_id,
                amount=amount,
                payee_name=payee_name,
                note=note,
                currency=currency,
            ),
            'payee_upi_id': payee_upi_id,
            'payee_name': payee_name,
            'amount': Decimal(amount),
            'currency': currency,
            'note': note,
        }


def get_payment_link(
    *,
    room_id: UUID,
    transaction_id: UUID,
    user: User,
    member_upi_id: str = ''
) -> dict:
    """
    Payment link for a room transaction.

    Contributions link to the admin's UPI ID and are available to any
    member. Reimbursement payout links are for the admin only and need the
    claim to be confirmed; the member's UPI ID comes from the payout record
    if one exists, otherwise from ``member_upi_id``.

    Raises:
        RoomNotFoundError: If room doesn't exist
        AccessDeniedError: If user lacks access
        TransactionNotFoundError: If the transaction is not in this room
        InvalidStateTransitionError: If the reimbursement is not confirmed
        TransactionValidationError: If no UPI ID is available for the payee,
            or the transaction type has no payment link
    """
    tx = get_room_transaction(room_id=room_id, transaction_id=transaction_id, user=user)

    if tx.type == TransactionType.CONTRIBUTION:
        if not (tx.admin_upi_id or tx.room.admin_upi_id):
            raise TransactionValidationError("Room admin has not configured a UPI ID")
        return UPIPaymentLinkGenerator.for_contribution(tx)

    if tx.type == TransactionType.REIMBURSEMENT:
        require_admin(tx.room, user)
        if tx.status != TransactionStatus.CONFIRMED:
            raise InvalidStateTransitionError("Only confirmed reimbursements can be paid out")

        payee = (tx.member_upi_id or member_upi_id or '').strip()
        if not payee:
            raise TransactionValidationError("Member UPI ID is required")
        return UPIPaymentLinkGenerator.for_reimbursement_payout(tx, payee)

    raise TransactionValidationError("Reimbursement payments have no payment link")
