# ==========================================
# apps/rooms/admin.py
# ==========================================

from django.contrib import admin
from apps.rooms.models import Room, RoomMembership


class RoomMembershipInline(admin.TabularInline):
    """Inline admin for room memberships."""
    model = RoomMembership
    extra = 0
    fields = ['user', 'role', 'joined_at']
    readonly_fields = ['joined_at']


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    """Admin interface for Rooms."""

    list_display = [
        'name',
        'admin',
        'admin_upi_id',
        'member_count',
        'invite_code',
        'created_at'
    ]
    list_filter = ['created_at']
    search_fields = ['name', 'description', 'admin__email', 'invite_code']
    readonly_fields = ['invite_code', 'created_at', 'updated_at']
    inlines = [RoomMembershipInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'description', 'admin', 'admin_upi_id')
        }),
        ('Invitation', {
            'fields': ('invite_code',)
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def member_count(self, obj):
        return obj.memberships.count()
    member_count.short_description = 'Members'


@admin.register(RoomMembership)
class RoomMembershipAdmin(admin.ModelAdmin):
    """Admin interface for Room Memberships."""

    list_display = ['user', 'room', 'role', 'joined_at']
    list_filter = ['role', 'joined_at']
    search_fields = ['user__email', 'room__name']
    readonly_fields = ['joined_at']
    ordering = ['-joined_at']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user', 'room')
