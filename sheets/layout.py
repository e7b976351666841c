# sheets/layout.py
"""
Season sheet layout.

    row 1:  JUGADOR | 21-jul |        |          |     | 22-jul | ...
    row 2:          | Recovery | Energy | Soreness | RPE | Recovery | ...
    row 3+: <player name> | metric values ...

Column A holds player names, every date takes a group of four columns.
Rows and columns here are 1-based, like the A1 notation they end up in.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta

from django.utils import dateformat, translation

HEADER_ROWS = 2
FIRST_DATA_ROW = HEADER_ROWS + 1
NAME_COLUMN = 1
FIRST_GROUP_COLUMN = 2
NAME_HEADER = 'JUGADOR'

METRIC_COLUMNS = (
    ('tqr_recovery', 'Recovery'),
    ('tqr_energy', 'Energy'),
    ('tqr_soreness', 'Soreness'),
    ('rpe_borg_scale', 'RPE'),
)
GROUP_WIDTH = len(METRIC_COLUMNS)
METRIC_OFFSETS = {name: offset for offset, (name, _) in enumerate(METRIC_COLUMNS)}
SUB_LABELS = [label for _, label in METRIC_COLUMNS]


@dataclass
class PlayerRow:
    """A player and their entries keyed by date ({date: {metric: value}})."""
    name: str
    entries: dict = field(default_factory=dict)


# ---- Season ----
def season_start_year(today, start_month=7):
    return today.year if today.month >= start_month else today.year - 1


def season_start(today, start_month=7):
    return date(season_start_year(today, start_month), start_month, 1)


def season_label(today, start_month=7, prefix='TEMPORADA'):
    year = season_start_year(today, start_month)
    return f"{prefix} {year}/{year + 1}"


def season_dates(start, end):
    """Every calendar date from start to end, both included."""
    days = (end - start).days
    return [start + timedelta(days=n) for n in range(days + 1)]


def date_label(day, locale='es'):
    """Day number plus abbreviated month in ``locale``, e.g. ``21-jul``."""
    with translation.override(locale):
        return dateformat.format(day, 'j-b')


# ---- Lookups on values read back from the sheet ----
def find_column_group(header_row, label):
    """First column of the group whose row-1 label equals ``label``, or None."""
    for column, value in enumerate(header_row, start=1):
        if column >= FIRST_GROUP_COLUMN and value == label:
            return column
    return None


def next_group_column(header_row, sub_header_row):
    used = max(len(header_row), len(sub_header_row), NAME_COLUMN)
    return used + 1


def find_player_row(name_column, name):
    """Sheet row of the first exact match in the name column (read from FIRST_DATA_ROW)."""
    for offset, cells in enumerate(name_column):
        if cells and cells[0] == name:
            return FIRST_DATA_ROW + offset
    return None


def next_player_row(name_column):
    return FIRST_DATA_ROW + len(name_column)


# ---- Whole grid ----
def header_rows(dates, locale='es'):
    top = [NAME_HEADER]
    subs = ['']
    for day in dates:
        top += [date_label(day, locale)] + [''] * (GROUP_WIDTH - 1)
        subs += SUB_LABELS
    return [top, subs]


def build_matrix(players, dates, locale='es'):
    """Header rows plus one row per player; missing values are blank cells."""
    matrix = header_rows(dates, locale)
    for player in players:
        row = [player.name]
        for day in dates:
            metrics = player.entries.get(day) or {}
            for name, _ in METRIC_COLUMNS:
                value = metrics.get(name)
                row.append('' if value is None else value)
        matrix.append(row)
    return matrix
