# ==========================================
# apps/rooms/models.py
# ==========================================

from django.conf import settings
from django.db import models
import uuid
import secrets


def generate_invite_code():
    length = getattr(settings, 'ROOM_INVITE_CODE_LENGTH', 16)
    return secrets.token_urlsafe(length)[:length]


class RoomRole(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    MEMBER = 'member', 'Member'


class Room(models.Model):
    """Shared expense fund with one admin and any number of members."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    description = models.CharField(max_length=500, blank=True)
    admin = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='administered_rooms')
    # Payee for contributions
    admin_upi_id = models.CharField(max_length=50)
    invite_code = models.CharField(max_length=32, unique=True, db_index=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'rooms'
        indexes = [
            models.Index(fields=['admin', 'created_at'], name='rooms_admin_i_0c9f4e_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.invite_code:
            self.invite_code = generate_invite_code()
        super().save(*args, **kwargs)

    def has_member(self, user):
        return self.memberships.filter(user=user).exists()

    def get_user_role(self, user):
        try:
            return self.memberships.get(user=user).role
        except RoomMembership.DoesNotExist:
            return None

    def is_admin(self, user):
        return self.admin_id == getattr(user, 'id', None)


class RoomMembership(models.Model):
    """User membership in a room with role."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='room_memberships')
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(max_length=20, choices=RoomRole.choices, default=RoomRole.MEMBER)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'room_members'
        unique_together = [['user', 'room']]
        indexes = [
            models.Index(fields=['room', 'role'], name='room_member_room_id_5b1d2a_idx'),
            models.Index(fields=['user', 'joined_at'], name='room_member_user_id_8e7c3f_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} in {self.room.name} ({self.role})"

    def save(self, *args, **kwargs):
        if self.room.admin_id == self.user_id:
            self.role = RoomRole.ADMIN
        super().save(*args, **kwargs)
