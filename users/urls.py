from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from .views import (
    UserRegisterView,
    UserLoginView,
    UserLogoutView,
    UserProfileMeView,
)

urlpatterns = [
    path('auth/register/', UserRegisterView.as_view(), name='user_register'),
    path('auth/login/',    UserLoginView.as_view(),    name='user_login'),
    path('auth/logout/',   UserLogoutView.as_view(),   name='user_logout'),
    path('auth/refresh/',  TokenRefreshView.as_view(), name='token_refresh'),

    path('me/', UserProfileMeView.as_view(), name='user_profile_me'),
]
