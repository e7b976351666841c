from rest_framework import serializers

from .models import DailyEntry


class DailyEntrySerializer(serializers.ModelSerializer):
    player_name = serializers.CharField(source='player.name', read_only=True)

    class Meta:
        model = DailyEntry
        fields = (
            'id', 'player', 'player_name', 'entry_date',
            'tqr_recovery', 'tqr_energy', 'tqr_soreness', 'rpe_borg_scale',
            'created_at', 'updated_at',
        )
        read_only_fields = fields


class EntrySubmissionSerializer(serializers.Serializer):
    """
    A pre-session (TQR) or post-session (RPE) questionnaire. Only the date is
    required; whichever metrics are present get stored.
    """
    entry_date = serializers.DateField()
    tqr_recovery = serializers.IntegerField(min_value=0, max_value=10, required=False)
    tqr_energy = serializers.IntegerField(min_value=1, max_value=5, required=False)
    tqr_soreness = serializers.IntegerField(min_value=1, max_value=5, required=False)
    rpe_borg_scale = serializers.IntegerField(min_value=0, max_value=10, required=False)

    def metrics(self):
        return {k: v for k, v in self.validated_data.items() if k != 'entry_date'}


class OverviewQuerySerializer(serializers.Serializer):
    entry_date = serializers.DateField(required=False)
