from django.contrib import admin

from .models import DailyEntry


@admin.register(DailyEntry)
class DailyEntryAdmin(admin.ModelAdmin):
    list_display = ('player', 'entry_date', 'tqr_recovery', 'tqr_energy', 'tqr_soreness', 'rpe_borg_scale')
    list_filter = ('entry_date',)
    search_fields = ('player__name',)
    date_hierarchy = 'entry_date'
