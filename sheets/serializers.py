from django.utils import timezone
from rest_framework import serializers


class SyncRequestSerializer(serializers.Serializer):
    spreadsheet_id = serializers.CharField(required=False, allow_blank=True, max_length=200)
    start_date = serializers.DateField(required=False)

    def validate_start_date(self, value):
        if value > timezone.localdate():
            raise serializers.ValidationError("Start date cannot be in the future.")
        return value


class EntrySyncRequestSerializer(serializers.Serializer):
    player_id = serializers.IntegerField()
    entry_date = serializers.DateField()
    spreadsheet_id = serializers.CharField(required=False, allow_blank=True, max_length=200)


class CreateSpreadsheetSerializer(serializers.Serializer):
    title = serializers.CharField(required=False, allow_blank=True, max_length=100)
