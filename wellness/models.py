# wellness/models.py
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

METRIC_FIELDS = ('tqr_recovery', 'tqr_energy', 'tqr_soreness', 'rpe_borg_scale')


def _score(low, high):
    return models.PositiveSmallIntegerField(
        null=True, blank=True,
        validators=[MinValueValidator(low), MaxValueValidator(high)],
    )


class DailyEntry(models.Model):
    """
    One row per player per day. Pre-session (TQR) and post-session (RPE)
    questionnaires arrive separately and fill different fields of the row.
    """
    player = models.ForeignKey(
        'players.Player',
        on_delete=models.CASCADE,
        related_name='daily_entries',
    )
    entry_date = models.DateField()
    tqr_recovery = _score(0, 10)
    tqr_energy = _score(1, 5)
    tqr_soreness = _score(1, 5)
    rpe_borg_scale = _score(0, 10)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ('player', 'entry_date') # Ensures one entry per player per day
        ordering = ['-entry_date']
        verbose_name_plural = "Daily Entries"

    def __str__(self):
        return f"{self.player.name} - {self.entry_date}"

    def metrics(self):
        return {name: getattr(self, name) for name in METRIC_FIELDS}
