from rest_framework import serializers
from .models import Room, RoomMembership
from apps.accounts.models import User


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class RoomSerializer(serializers.ModelSerializer):
    """Main serializer for rooms."""

    admin = UserMinimalSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()
    user_role = serializers.SerializerMethodField()

    class Meta:
        model = Room
        fields = [
            'id',
            'name',
            'description',
            'admin',
            'admin_upi_id',
            'invite_code',
            'member_count',
            'user_role',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        return obj.memberships.count()

    def get_user_role(self, obj):
        """Get current user's role in the room."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.get_user_role(request.user)
        return None


class RoomCreateSerializer(serializers.Serializer):
    """Validate input for creating a room."""

    name = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    admin_upi_id = serializers.CharField(min_length=3, max_length=50)

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError('Room name is required.')
        return value


class RoomListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    admin = UserMinimalSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Room
        fields = [
            'id',
            'name',
            'description',
            'admin',
            'member_count',
            'created_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        return obj.memberships.count()


class RoomMemberSerializer(serializers.ModelSerializer):
    """Detailed member information."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = RoomMembership
        fields = ['id', 'user', 'role', 'joined_at']
        read_only_fields = fields


class RoomInvitePreviewSerializer(serializers.ModelSerializer):
    """What a prospective member sees before joining."""

    admin = UserMinimalSerializer(read_only=True)
    already_member = serializers.SerializerMethodField()

    class Meta:
        model = Room
        fields = ['id', 'name', 'description', 'admin', 'already_member']
        read_only_fields = fields

    def get_already_member(self, obj):
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.has_member(request.user)
        return False
