from django.urls import path
from .views import SheetSyncView, SheetEntrySyncView, SpreadsheetCreateView

urlpatterns = [
    path('sync/', SheetSyncView.as_view(), name='sheets_sync'),
    path('sync/entry/', SheetEntrySyncView.as_view(), name='sheets_sync_entry'),
    path('create/', SpreadsheetCreateView.as_view(), name='sheets_create'),
]
