import logging

from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from users.permissions import IsAdmin
from wellness.models import DailyEntry

from .errors import SheetSyncError
from .serializers import CreateSpreadsheetSerializer, EntrySyncRequestSerializer, SyncRequestSerializer
from .services import create_with_headers, get_sync, push_entry, rebuild_from_store

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    SheetSyncError.NOT_CONFIGURED: status.HTTP_400_BAD_REQUEST,
    SheetSyncError.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    SheetSyncError.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    SheetSyncError.TAB_MISSING: status.HTTP_404_NOT_FOUND,
    SheetSyncError.TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    SheetSyncError.UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def sync_failure(exc):
    return Response(
        {'success': False, 'reason': exc.kind, 'error': exc.message},
        status=STATUS_BY_KIND.get(exc.kind, status.HTTP_502_BAD_GATEWAY),
    )


class SheetSyncView(generics.GenericAPIView):
    """
    Full resynchronization of the season tab from the database.
    Payload (all optional): {"spreadsheet_id": str, "start_date": "YYYY-MM-DD"}
    """
    serializer_class = SyncRequestSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def post(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            summary = rebuild_from_store(
                spreadsheet_id=ser.validated_data.get('spreadsheet_id') or None,
                start_date=ser.validated_data.get('start_date'),
            )
        except SheetSyncError as exc:
            logger.warning("Full sheet sync failed: %s", exc.message)
            return sync_failure(exc)
        return Response({'success': True, **summary}, status=status.HTTP_200_OK)


class SheetEntrySyncView(generics.GenericAPIView):
    """
    Re-send one stored entry in incremental mode.
    Payload: {"player_id": int, "entry_date": "YYYY-MM-DD", "spreadsheet_id": str?}
    """
    serializer_class = EntrySyncRequestSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def post(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        entry = get_object_or_404(
            DailyEntry.objects.select_related('player'),
            player_id=ser.validated_data['player_id'],
            entry_date=ser.validated_data['entry_date'],
        )
        try:
            update = push_entry(entry, sync=get_sync(ser.validated_data.get('spreadsheet_id') or None))
        except SheetSyncError as exc:
            logger.warning("Entry sync failed for %s: %s", entry, exc.message)
            return sync_failure(exc)
        return Response({
            'success': True,
            'sheet': update.sheet,
            'row': update.row,
            'column': update.column,
            'cells_written': update.cells_written,
        }, status=status.HTTP_200_OK)


class SpreadsheetCreateView(generics.GenericAPIView):
    """Create a new spreadsheet with the season tab and headers ready."""
    serializer_class = CreateSpreadsheetSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def post(self, request, *args, **kwargs):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            created = create_with_headers(ser.validated_data.get('title') or None)
        except SheetSyncError as exc:
            logger.warning("Spreadsheet creation failed: %s", exc.message)
            return sync_failure(exc)
        return Response({'success': True, **created}, status=status.HTTP_201_CREATED)
