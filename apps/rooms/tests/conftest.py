import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.rooms.models import Room, RoomMembership, RoomRole


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
    """User who administers the room."""
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
        display_name='Room Member',
    )


@pytest.fixture
def outsider(db):
    """User with no membership in the room."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='OutsiderPass123!',
        display_name='Outsider',
    )


@pytest.fixture
def room(room_admin, room_member):
    """Room with an admin and one regular member."""
    room = Room.objects.create(
        name='Flat 42',
        description='Shared groceries and bills',
        admin=room_admin,
        admin_upi_id='admin@okbank',
    )
    RoomMembership.objects.create(user=room_admin, room=room, role=RoomRole.ADMIN)
    RoomMembership.objects.create(user=room_member, room=room, role=RoomRole.MEMBER)
    return room


@pytest.fixture
def admin_client(room_admin):
    return _auth_client(room_admin)


@pytest.fixture
def member_client(room_member):
    return _auth_client(room_member)


@pytest.fixture
def outsider_client(outsider):
    return _auth_client(outsider)
