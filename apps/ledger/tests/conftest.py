import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.rooms.models import Room, RoomMembership, RoomRole
from apps.ledger.models import Transaction, TransactionStatus, TransactionType


def _auth_client(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def room_admin(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='AdminPass123!',
        display_name='Room Admin',
    )


@pytest.fixture
def room_member(db):
    return User.objects.create_user(
        email='member@example.com',
        password='MemberPass123!',
        display_name='Asha',
    )


@pytest.fixture
def outsider(db):
    return User.objects.create_user(
        email='outsider@example.com',
        password='OutsiderPass123!',
    )


@pytest.fixture
def room(room_admin, room_member):
    """Room with an admin and one regular member."""
    room = Room.objects.create(
        name='Flat 42',
        admin=room_admin,
        admin_upi_id='admin@okbank',
    )
    RoomMembership.objects.create(user=room_admin, room=room, role=RoomRole.ADMIN)
    RoomMembership.objects.create(user=room_member, room=room, role=RoomRole.MEMBER)
    return room


@pytest.fixture
def other_room(room_admin):
    """A second room run by the same admin."""
    room = Room.objects.create(
        name='Office Snacks',
        admin=room_admin,
        admin_upi_id='admin@okbank',
    )
    RoomMembership.objects.create(user=room_admin, room=room, role=RoomRole.ADMIN)
    return room


@pytest.fixture
def make_transaction(room, room_member):
    """Factory for transactions that skips the service layer."""
    def _make(
        type=TransactionType.CONTRIBUTION,
        amount='100.00',
        status=TransactionStatus.PENDING,
        user=None,
        room_=None,
        **extra
    ):
        if type == TransactionType.REIMBURSEMENT:
            extra.setdefault('notes', 'Groceries')
            extra.setdefault('merchant_upi_id', 'store@okbank')
        return Transaction.objects.create(
            room=room_ or room,
            user=user or room_member,
            type=type,
            amount=Decimal(amount),
            status=status,
            **extra
        )
    return _make


@pytest.fixture
def pending_contribution(make_transaction):
    return make_transaction(amount='500.00', notes='March share', admin_upi_id='admin@okbank')


@pytest.fixture
def pending_reimbursement(make_transaction):
    return make_transaction(type=TransactionType.REIMBURSEMENT, amount='200.00')


@pytest.fixture
def confirmed_reimbursement(make_transaction):
    return make_transaction(
        type=TransactionType.REIMBURSEMENT,
        amount='200.00',
        status=TransactionStatus.CONFIRMED,
    )


@pytest.fixture
def admin_client(room_admin):
    return _auth_client(room_admin)


@pytest.fixture
def member_client(room_member):
    return _auth_client(room_member)


@pytest.fixture
def outsider_client(outsider):
    return _auth_client(outsider)
