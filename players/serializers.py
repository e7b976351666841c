from rest_framework import serializers

from .models import Player


class PlayerSerializer(serializers.ModelSerializer):
    auth_token = serializers.CharField(source='token', read_only=True)
    form_path = serializers.CharField(read_only=True)
    entries_count = serializers.SerializerMethodField()

    class Meta:
        model = Player
        fields = ('id', 'name', 'auth_token', 'form_path', 'created_at', 'entries_count')
        read_only_fields = ('id', 'created_at')

    def get_entries_count(self, obj):
        annotated = getattr(obj, 'entries_count', None)
        if annotated is not None:
            return annotated
        return obj.daily_entries.count()

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank.")
        return value


class PlayerPublicSerializer(serializers.ModelSerializer):
    """What the athlete's own form gets to see: no token echo."""
    class Meta:
        model = Player
        fields = ('id', 'name')
