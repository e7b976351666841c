# wellness/services.py
import logging

from django.db import DatabaseError, transaction
from rest_framework import status
from rest_framework.exceptions import APIException

from .models import METRIC_FIELDS, DailyEntry
from .signals import entry_saved

logger = logging.getLogger(__name__)


class PersistenceError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal persistence failure.'
    default_code = 'persistence_failure'


def provided_metrics(metrics):
    """Keep known metric names with a value; everything else counts as absent."""
    return {
        name: value
        for name, value in (metrics or {}).items()
        if name in METRIC_FIELDS and value is not None
    }


def upsert_entry(player, entry_date, metrics=None):
    """
    Store ``metrics`` for (player, entry_date) and return the full row.

    Insert-or-merge is a single INSERT ... ON CONFLICT DO UPDATE that only
    touches the provided columns, so a later RPE-only submission keeps the
    TQR values of the morning. With no metrics the row is fetched (or
    created empty) and returned as is.
    """
    fields = provided_metrics(metrics)
    try:
        with transaction.atomic():
            if fields:
                DailyEntry.objects.bulk_create(
                    [DailyEntry(player=player, entry_date=entry_date, **fields)],
                    update_conflicts=True,
                    unique_fields=['player', 'entry_date'],
                    update_fields=[*fields, 'updated_at'],
                )
                entry = DailyEntry.objects.select_related('player').get(
                    player=player, entry_date=entry_date,
                )
            else:
                entry, _ = DailyEntry.objects.select_related('player').get_or_create(
                    player=player, entry_date=entry_date,
                )
    except DatabaseError as exc:
        logger.exception("Could not store entry for player %s on %s", player.pk, entry_date)
        raise PersistenceError() from exc

    entry_saved.send(sender=DailyEntry, player=player, entry=entry, fields=tuple(fields))
    return entry
