from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import Room
from .serializers import (
    RoomSerializer,
    RoomCreateSerializer,
    RoomListSerializer,
    RoomMemberSerializer,
    RoomInvitePreviewSerializer,
)
from .permissions import IsRoomAdmin

from apps.rooms.services import (
    create_room,
    get_room_by_invite_code,
    join_room,
    get_room_members,
    regenerate_invite_code,
    # Exceptions
    InvalidInviteCodeError,
    AlreadyMemberError,
    InsufficientPermissionsError,
)


class RoomPagination(PageNumberPagination):
    """Custom pagination for rooms."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class RoomViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for rooms.

    Views are thin HTTP handlers; business logic lives in services.

    list: Get all rooms the user is a member of
    create: Create a new room (creator becomes admin)
    retrieve: Get a specific room
    """

    queryset = Room.objects.select_related('admin').prefetch_related('memberships')
    serializer_class = RoomSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = RoomPagination

    def get_queryset(self):
        """Return only rooms where user is a member."""
        return Room.objects.filter(
            memberships__user=self.request.user
        ).select_related('admin').prefetch_related('memberships').distinct()

    def get_serializer_class(self):
        if self.action == 'list':
            return RoomListSerializer
        elif self.action == 'create':
            return RoomCreateSerializer
        return RoomSerializer

    def create(self, request, *args, **kwargs):
        """Create a new room."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        room = create_room(
            name=serializer.validated_data['name'],
            admin=request.user,
            admin_upi_id=serializer.validated_data['admin_upi_id'],
            description=serializer.validated_data.get('description', ''),
        )

        output_serializer = RoomSerializer(room, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get all members of the room."""
        room = self.get_object()
        memberships = get_room_members(room_id=room.id)
        serializer = RoomMemberSerializer(memberships, many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, IsRoomAdmin])
    def regenerate_invite(self, request, pk=None):
        """Regenerate invite code (admin only)."""
        room = self.get_object()
        try:
            new_code = regenerate_invite_code(room_id=room.id, user=request.user)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response({
            'invite_code': new_code,
            'message': 'Invite code regenerated successfully'
        })


@extend_schema(
    responses={200: RoomInvitePreviewSerializer, 201: RoomMemberSerializer},
    description="Preview (GET) or join (POST) the room an invite code points to.",
    tags=['rooms'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def join_by_invite(request, invite_code):
    """Preview or join a room by invite code."""
    try:
        room = get_room_by_invite_code(invite_code=invite_code)
    except InvalidInviteCodeError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    if request.method == 'GET':
        serializer = RoomInvitePreviewSerializer(room, context={'request': request})
        return Response(serializer.data)

    try:
        membership = join_room(invite_code=invite_code, user=request.user)
    except InvalidInviteCodeError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except AlreadyMemberError:
        return Response({
            'already_member': True,
            'room_id': str(room.id),
            'message': 'You are already a member of this room',
        })

    output_serializer = RoomMemberSerializer(membership)
    return Response(output_serializer.data, status=status.HTTP_201_CREATED)
