from django.contrib import admin

from .models import Player


@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    list_display = ('name', 'auth_token', 'created_at')
    search_fields = ('name',)
    readonly_fields = ('auth_token', 'created_at', 'updated_at')
