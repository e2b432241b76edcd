from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication (accounts are provisioned by the identity provider or admin)
    path('login/', views.login, name='login'),

    # User profile
    path('user/', views.get_current_user, name='current-user'),
    path('user/update/', views.update_profile, name='update-profile'),
    path('users/<uuid:pk>/', views.UserDetailView.as_view(), name='user-detail'),
]
