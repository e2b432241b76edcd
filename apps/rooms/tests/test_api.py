import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status

from apps.rooms.models import Room, RoomMembership, RoomRole


@pytest.mark.django_db
class TestRoomCreate:
    """Tests for POST /api/rooms/"""

    def test_create_room(self, outsider_client, outsider):
        response = outsider_client.post(reverse('rooms:room-list'), {
            'name': 'Hostel Mess',
            'description': 'Monthly mess fund',
            'admin_upi_id': 'mess@okbank',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Hostel Mess'
        assert response.data['user_role'] == RoomRole.ADMIN
        assert response.data['member_count'] == 1

        room = Room.objects.get(id=response.data['id'])
        assert room.admin == outsider

    def test_create_room_requires_upi_id(self, outsider_client):
        response = outsider_client.post(reverse('rooms:room-list'), {
            'name': 'No UPI',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'admin_upi_id' in response.data

    def test_create_room_blank_name(self, outsider_client):
        response = outsider_client.post(reverse('rooms:room-list'), {
            'name': '   ',
            'admin_upi_id': 'x@okbank',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_room_requires_authentication(self, api_client):
        response = api_client.post(reverse('rooms:room-list'), {
            'name': 'Anon',
            'admin_upi_id': 'anon@okbank',
        }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestRoomRead:
    """Tests for GET /api/rooms/ and /api/rooms/{id}/"""

    def test_list_only_my_rooms(self, member_client, room):
        Room.objects.create(name='Elsewhere', admin=room.admin, admin_upi_id='a@okbank')

        response = member_client.get(reverse('rooms:room-list'))

        assert response.status_code == status.HTTP_200_OK
        names = [r['name'] for r in response.data['results']]
        assert names == ['Flat 42']

    def test_retrieve_as_member(self, member_client, room):
        response = member_client.get(reverse('rooms:room-detail', kwargs={'pk': room.id}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user_role'] == RoomRole.MEMBER
        assert response.data['admin_upi_id'] == 'admin@okbank'

    def test_retrieve_as_outsider(self, outsider_client, room):
        response = outsider_client.get(reverse('rooms:room-detail', kwargs={'pk': room.id}))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_members(self, member_client, room):
        response = member_client.get(reverse('rooms:room-members', kwargs={'pk': room.id}))

        assert response.status_code == status.HTTP_200_OK
        assert [m['role'] for m in response.data] == [RoomRole.ADMIN, RoomRole.MEMBER]


@pytest.mark.django_db
class TestRegenerateInvite:
    """Tests for POST /api/rooms/{id}/regenerate_invite/"""

    def test_admin_regenerates(self, admin_client, room):
        old_code = room.invite_code

        response = admin_client.post(reverse('rooms:room-regenerate-invite', kwargs={'pk': room.id}))

        assert response.status_code == status.HTTP_200_OK
        room.refresh_from_db()
        assert room.invite_code == response.data['invite_code']
        assert room.invite_code != old_code

    def test_member_forbidden(self, member_client, room):
        response = member_client.post(reverse('rooms:room-regenerate-invite', kwargs={'pk': room.id}))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestJoinByInvite:
    """Tests for GET/POST /api/rooms/join/{invite_code}/"""

    def test_preview(self, outsider_client, room):
        response = outsider_client.get(reverse('rooms:join', kwargs={'invite_code': room.invite_code}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Flat 42'
        assert response.data['already_member'] is False

    def test_join(self, outsider_client, outsider, room):
        response = outsider_client.post(reverse('rooms:join', kwargs={'invite_code': room.invite_code}))

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['role'] == RoomRole.MEMBER
        assert RoomMembership.objects.filter(room=room, user=outsider).exists()

    def test_join_already_member(self, member_client, room):
        response = member_client.post(reverse('rooms:join', kwargs={'invite_code': room.invite_code}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['already_member'] is True
        assert response.data['room_id'] == str(room.id)

    def test_join_invalid_code(self, outsider_client, room):
        response = outsider_client.post(reverse('rooms:join', kwargs={'invite_code': uuid4().hex}))

        assert response.status_code == status.HTTP_404_NOT_FOUND
