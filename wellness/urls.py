from django.urls import path
from .views import (
    EntrySubmitView,
    MyEntriesView,
    EntriesOverviewView,
)

urlpatterns = [
    # Player (token) views
    path('', EntrySubmitView.as_view(), name='entry_submit'),
    path('mine/', MyEntriesView.as_view(), name='entry_mine'),

    # Coach/Admin views
    path('overview/', EntriesOverviewView.as_view(), name='entry_overview'), # Format ?entry_date=YYYY-MM-DD
]
