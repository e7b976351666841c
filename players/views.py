import logging

from django.db.models import Count
from rest_framework import generics, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from users.permissions import IsAdmin, IsCoachOrAdmin
from wellness.serializers import DailyEntrySerializer

from .authentication import PlayerTokenAuthentication
from .models import Player
from .serializers import PlayerPublicSerializer, PlayerSerializer

logger = logging.getLogger(__name__)


class PlayerViewSet(viewsets.ModelViewSet):
    """
    Players CRUD for administrators.

    Permissions:
      - list/retrieve/create/update/destroy: ADMIN only
      - entries (history): COACH or ADMIN
    Only ``name`` is writable; the token is generated on create.
    """
    queryset = Player.objects.annotate(entries_count=Count('daily_entries')).order_by('name')
    serializer_class = PlayerSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def get_permissions(self):
        if self.action == 'entries':
            self.permission_classes = [IsAuthenticated, IsCoachOrAdmin]
        return super().get_permissions()

    def perform_create(self, serializer):
        player = serializer.save()
        logger.info("Player created: %s (id=%s)", player.name, player.pk)

    def perform_destroy(self, instance):
        logger.info("Deleting player %s (id=%s) and their entries", instance.name, instance.pk)
        instance.delete()

    @action(detail=True, methods=['get'])
    def entries(self, request, pk=None):
        player = self.get_object()
        qs = player.daily_entries.select_related('player').order_by('-entry_date')
        return Response(DailyEntrySerializer(qs, many=True).data)


class PlayerMeView(generics.RetrieveAPIView):
    """The token's own player, used by the submission form."""
    serializer_class = PlayerPublicSerializer
    authentication_classes = [PlayerTokenAuthentication]
    permission_classes = [IsAuthenticated]

    def get_object(self):
        return self.request.user
