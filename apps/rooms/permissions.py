from rest_framework import permissions


class IsRoomAdmin(permissions.BasePermission):
    """
    Permission: User must be the room admin.
    """

    message = 'Only the room admin can perform this action.'

    def has_object_permission(self, request, view, obj):
        # obj is a Room instance
        return obj.is_admin(request.user)
