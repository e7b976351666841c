from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import PlayerViewSet, PlayerMeView

router = DefaultRouter()
router.register(r'players', PlayerViewSet, basename='player')

urlpatterns = [
    path('player/me/', PlayerMeView.as_view(), name='player_me'),
    path('', include(router.urls)),
]
