from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'rooms'

router = SimpleRouter()
router.register(r'', views.RoomViewSet, basename='room')

urlpatterns = [
    # Room ViewSet routes
    # GET    /api/rooms/                         - List user's rooms
    # POST   /api/rooms/                         - Create room
    # GET    /api/rooms/{id}/                    - Get room details
    # GET    /api/rooms/{id}/members/            - List members
    # POST   /api/rooms/{id}/regenerate_invite/  - Regenerate invite code (admin)

    # Invite endpoints
    # GET    /api/rooms/join/{invite_code}/      - Preview room
    # POST   /api/rooms/join/{invite_code}/      - Join room
    path('join/<str:invite_code>/', views.join_by_invite, name='join'),

    path('', include(router.urls)),
]
