from datetime import date

import pytest

from sheets.layout import (
    FIRST_DATA_ROW,
    PlayerRow,
    build_matrix,
    date_label,
    find_column_group,
    find_player_row,
    next_group_column,
    next_player_row,
    season_dates,
    season_label,
    season_start,
)


@pytest.mark.parametrize(
    "today, expected",
    [
        (date(2025, 7, 1), "TEMPORADA 2025/2026"),
        (date(2025, 12, 31), "TEMPORADA 2025/2026"),
        (date(2026, 6, 30), "TEMPORADA 2025/2026"),
        (date(2026, 7, 1), "TEMPORADA 2026/2027"),
    ],
)
def test_season_label_switches_on_start_month(today, expected):
    assert season_label(today) == expected


def test_season_label_custom_prefix_and_month():
    assert season_label(date(2025, 8, 15), start_month=9, prefix="SEASON") == "SEASON 2024/2025"


def test_season_start():
    assert season_start(date(2026, 3, 10)) == date(2025, 7, 1)
    assert season_start(date(2025, 7, 21)) == date(2025, 7, 1)


def test_season_dates_inclusive_and_empty():
    assert season_dates(date(2025, 7, 30), date(2025, 8, 2)) == [
        date(2025, 7, 30), date(2025, 7, 31), date(2025, 8, 1), date(2025, 8, 2),
    ]
    assert season_dates(date(2025, 8, 2), date(2025, 8, 1)) == []


def test_date_label_spanish_abbreviation():
    assert date_label(date(2025, 7, 21)) == "21-jul"
    assert date_label(date(2025, 7, 5)) == "5-jul"


def test_find_column_group_ignores_name_column():
    top = ["21-jul", "21-jul", "", "", "", "22-jul"]
    assert find_column_group(top, "21-jul") == 2
    assert find_column_group(top, "22-jul") == 6
    assert find_column_group(top, "23-jul") is None


def test_next_group_column_uses_widest_header_row():
    # Row 1 gets trimmed after the last label; row 2 still spans the group
    top = ["JUGADOR", "21-jul"]
    subs = ["", "Recovery", "Energy", "Soreness", "RPE"]
    assert next_group_column(top, subs) == 6
    assert next_group_column([], []) == 2


def test_player_row_lookup_first_exact_match():
    names = [["Pedri"], [], ["Gavi"], ["Pedri"], ["gavi"]]
    assert find_player_row(names, "Pedri") == FIRST_DATA_ROW
    assert find_player_row(names, "Gavi") == FIRST_DATA_ROW + 2
    assert find_player_row(names, "GAVI") is None
    assert next_player_row(names) == FIRST_DATA_ROW + 5


def test_build_matrix_keeps_players_without_entries():
    days = [date(2025, 7, 21), date(2025, 7, 22)]
    players = [
        PlayerRow("A", {date(2025, 7, 22): {"tqr_recovery": 7, "rpe_borg_scale": 6}}),
        PlayerRow("B"),
    ]

    matrix = build_matrix(players, days)

    assert matrix[0] == ["JUGADOR", "21-jul", "", "", "", "22-jul", "", "", ""]
    assert matrix[1][1:5] == ["Recovery", "Energy", "Soreness", "RPE"]
    assert matrix[2] == ["A", "", "", "", "", 7, "", "", 6]
    assert matrix[3] == ["B"] + [""] * 8
