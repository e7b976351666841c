from django.utils import timezone
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from players.authentication import PlayerTokenAuthentication
from users.permissions import IsCoachOrAdmin

from .models import DailyEntry
from .serializers import DailyEntrySerializer, EntrySubmissionSerializer, OverviewQuerySerializer
from .services import upsert_entry


class EntrySubmitView(generics.GenericAPIView):
    """
    Player submission endpoint. Merges the submitted metrics into the
    player's row for ``entry_date`` and returns the whole stored row.
    """
    serializer_class = EntrySubmissionSerializer
    authentication_classes = [PlayerTokenAuthentication]
    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = upsert_entry(
            request.user,
            serializer.validated_data['entry_date'],
            serializer.metrics(),
        )
        return Response(DailyEntrySerializer(entry).data, status=status.HTTP_200_OK)


class MyEntriesView(generics.ListAPIView):
    serializer_class = DailyEntrySerializer
    authentication_classes = [PlayerTokenAuthentication]
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        # Players can only see their own entries
        return DailyEntry.objects.filter(player=self.request.user).select_related('player').order_by('-entry_date')


class EntriesOverviewView(generics.ListAPIView):
    """All players' entries for one date (``?entry_date=YYYY-MM-DD``, default today)."""
    serializer_class = DailyEntrySerializer
    permission_classes = [IsAuthenticated, IsCoachOrAdmin]

    def get_queryset(self):
        query = OverviewQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        entry_date = query.validated_data.get('entry_date') or timezone.localdate()
        return DailyEntry.objects.filter(entry_date=entry_date).select_related('player').order_by('player__name')
