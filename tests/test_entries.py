import uuid
from datetime import date

import pytest
from google.auth.exceptions import RefreshError

from sheets.errors import SheetSyncError
from wellness.models import DailyEntry
from wellness.services import upsert_entry

URL = '/api/entries/'


@pytest.mark.django_db
def test_submission_creates_row(player_client, player):
    res = player_client.post(URL, {
        'entry_date': '2025-07-21', 'tqr_recovery': 7, 'tqr_energy': 4, 'tqr_soreness': 2,
    }, format='json')

    assert res.status_code == 200
    assert res.data['player'] == player.id
    assert res.data['player_name'] == 'Lamine Yamal'
    assert res.data['entry_date'] == '2025-07-21'
    assert (res.data['tqr_recovery'], res.data['tqr_energy'], res.data['tqr_soreness']) == (7, 4, 2)
    assert res.data['rpe_borg_scale'] is None


@pytest.mark.django_db
def test_rpe_after_tqr_keeps_morning_values(player_client, player):
    player_client.post(URL, {
        'entry_date': '2025-07-21', 'tqr_recovery': 7, 'tqr_energy': 4, 'tqr_soreness': 2,
    }, format='json')

    res = player_client.post(URL, {'entry_date': '2025-07-21', 'rpe_borg_scale': 6}, format='json')

    assert res.status_code == 200
    assert res.data['tqr_recovery'] == 7
    assert res.data['rpe_borg_scale'] == 6
    assert DailyEntry.objects.filter(player=player).count() == 1


@pytest.mark.django_db
def test_resubmission_overwrites_only_submitted_fields(player_client, player):
    player_client.post(URL, {'entry_date': '2025-07-21', 'tqr_energy': 4, 'rpe_borg_scale': 6}, format='json')

    res = player_client.post(URL, {'entry_date': '2025-07-21', 'tqr_energy': 2}, format='json')

    assert res.data['tqr_energy'] == 2
    assert res.data['rpe_borg_scale'] == 6


@pytest.mark.django_db
def test_explicit_null_does_not_clear_stored_value(player_client):
    player_client.post(URL, {'entry_date': '2025-07-21', 'tqr_recovery': 9}, format='json')

    res = player_client.post(URL, {'entry_date': '2025-07-21', 'tqr_recovery': None}, format='json')

    # null is rejected by the field, the stored value stays
    assert res.status_code == 400
    assert DailyEntry.objects.get().tqr_recovery == 9


@pytest.mark.django_db
def test_date_only_submission_returns_existing_row_unchanged(player_client, player):
    upsert_entry(player, date(2025, 7, 21), {'tqr_soreness': 3})

    res = player_client.post(URL, {'entry_date': '2025-07-21'}, format='json')

    assert res.status_code == 200
    assert res.data['tqr_soreness'] == 3
    assert DailyEntry.objects.count() == 1


@pytest.mark.django_db
def test_entries_are_per_date(player_client, player):
    player_client.post(URL, {'entry_date': '2025-07-21', 'tqr_energy': 4}, format='json')
    player_client.post(URL, {'entry_date': '2025-07-22', 'tqr_energy': 5}, format='json')

    assert DailyEntry.objects.filter(player=player).count() == 2


@pytest.mark.django_db
def test_missing_date_is_rejected(player_client):
    res = player_client.post(URL, {'tqr_energy': 4}, format='json')

    assert res.status_code == 400
    assert 'entry_date' in res.data
    assert not DailyEntry.objects.exists()


@pytest.mark.django_db
@pytest.mark.parametrize('field, value', [
    ('tqr_recovery', 11),
    ('tqr_recovery', -1),
    ('tqr_energy', 0),
    ('tqr_energy', 6),
    ('tqr_soreness', 0),
    ('rpe_borg_scale', 11),
])
def test_out_of_range_values_are_rejected(player_client, field, value):
    res = player_client.post(URL, {'entry_date': '2025-07-21', field: value}, format='json')

    assert res.status_code == 400
    assert field in res.data
    assert not DailyEntry.objects.exists()


@pytest.mark.django_db
def test_scale_bounds_are_accepted(player_client):
    res = player_client.post(URL, {
        'entry_date': '2025-07-21',
        'tqr_recovery': 0, 'tqr_energy': 5, 'tqr_soreness': 1, 'rpe_borg_scale': 10,
    }, format='json')

    assert res.status_code == 200
    assert res.data['tqr_recovery'] == 0


# ---- Token resolution ----
@pytest.mark.django_db
def test_malformed_and_unknown_tokens_look_the_same(api_client, player):
    payload = {'entry_date': '2025-07-21', 'tqr_energy': 4}

    api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
    malformed = api_client.post(URL, payload, format='json')
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {uuid.uuid4()}')
    unknown = api_client.post(URL, payload, format='json')

    assert malformed.status_code == unknown.status_code == 401
    assert malformed.data == unknown.data
    assert not DailyEntry.objects.exists()


@pytest.mark.django_db
def test_missing_token_is_unauthorized(api_client, player):
    res = api_client.post(URL, {'entry_date': '2025-07-21'}, format='json')

    assert res.status_code == 401


@pytest.mark.django_db
def test_malformed_token_never_hits_the_database(api_client, django_assert_num_queries):
    api_client.credentials(HTTP_AUTHORIZATION="Bearer 1234';DROP-TABLE-players_player")

    with django_assert_num_queries(0):
        res = api_client.get('/api/player/me/')

    assert res.status_code == 401


@pytest.mark.django_db
def test_token_in_body_is_accepted(api_client, player):
    res = api_client.post(URL, {
        'auth_token': player.token, 'entry_date': '2025-07-21', 'rpe_borg_scale': 3,
    }, format='json')

    assert res.status_code == 200
    assert res.data['player'] == player.id


@pytest.mark.django_db
def test_empty_body_token_is_rejected_like_a_bad_one(api_client, player):
    payload = {'entry_date': '2025-07-21', 'tqr_energy': 4}

    empty = api_client.post(URL, {**payload, 'auth_token': ''}, format='json')
    malformed = api_client.post(URL, {**payload, 'auth_token': 'nope'}, format='json')

    assert empty.status_code == malformed.status_code == 401
    assert empty.data == malformed.data
    assert not DailyEntry.objects.exists()


@pytest.mark.django_db
def test_uppercase_token_resolves(api_client, player):
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {player.token.upper()}')

    res = api_client.get('/api/player/me/')

    assert res.status_code == 200
    assert res.data == {'id': player.id, 'name': 'Lamine Yamal'}


@pytest.mark.django_db
def test_player_sees_only_own_entries(player_client, player):
    other = player.__class__.objects.create(name='Pedri')
    upsert_entry(player, date(2025, 7, 20), {'tqr_energy': 3})
    upsert_entry(player, date(2025, 7, 21), {'tqr_energy': 4})
    upsert_entry(other, date(2025, 7, 21), {'tqr_energy': 5})

    res = player_client.get('/api/entries/mine/')

    assert res.status_code == 200
    assert [e['entry_date'] for e in res.data] == ['2025-07-21', '2025-07-20']


@pytest.mark.django_db
def test_player_token_does_not_open_staff_endpoints(player_client):
    assert player_client.get('/api/players/').status_code == 401


# ---- Overview ----
@pytest.mark.django_db
def test_overview_lists_one_date_for_coaches(coach_client, player):
    other = player.__class__.objects.create(name='Gavi')
    upsert_entry(player, date(2025, 7, 21), {'tqr_energy': 4})
    upsert_entry(other, date(2025, 7, 21), {'rpe_borg_scale': 7})
    upsert_entry(other, date(2025, 7, 22), {'rpe_borg_scale': 5})

    res = coach_client.get('/api/entries/overview/', {'entry_date': '2025-07-21'})

    assert res.status_code == 200
    assert [e['player_name'] for e in res.data] == ['Gavi', 'Lamine Yamal']


@pytest.mark.django_db
def test_overview_rejects_bad_date(coach_client):
    res = coach_client.get('/api/entries/overview/', {'entry_date': '21/07/2025'})

    assert res.status_code == 400


# ---- Service ----
@pytest.mark.django_db
def test_upsert_ignores_unknown_and_empty_metrics(player):
    entry = upsert_entry(player, date(2025, 7, 21), {
        'tqr_energy': 4, 'tqr_recovery': None, 'mood': 5,
    })

    assert entry.metrics() == {
        'tqr_recovery': None, 'tqr_energy': 4, 'tqr_soreness': None, 'rpe_borg_scale': None,
    }


@pytest.mark.django_db
def test_upsert_reports_saved_fields(player):
    from wellness.signals import entry_saved

    seen = []

    def listener(sender, entry, fields, **kwargs):
        seen.append((entry.entry_date, fields))

    entry_saved.connect(listener)
    try:
        upsert_entry(player, date(2025, 7, 21), {'rpe_borg_scale': 6})
        upsert_entry(player, date(2025, 7, 21))
    finally:
        entry_saved.disconnect(listener)

    assert seen == [(date(2025, 7, 21), ('rpe_borg_scale',)), (date(2025, 7, 21), ())]


# ---- Sync on submit ----
class _RecordingSync:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def sync_entry(self, player_name, entry_date, metrics, today=None):
        self.calls.append((player_name, entry_date, metrics))
        if self.error:
            raise self.error


@pytest.fixture
def sync_on_submit(google_settings, monkeypatch):
    google_settings.SHEETS_SYNC_ON_SUBMIT = True
    recorder = _RecordingSync()
    monkeypatch.setattr('sheets.receivers.get_sync', lambda config=None: recorder)
    return recorder


@pytest.mark.django_db
def test_submission_is_mirrored_to_sheet(player_client, sync_on_submit):
    player_client.post(URL, {'entry_date': '2025-07-21', 'tqr_energy': 4}, format='json')
    player_client.post(URL, {'entry_date': '2025-07-21', 'rpe_borg_scale': 6}, format='json')

    # Only the fields of each submission are pushed
    assert sync_on_submit.calls == [
        ('Lamine Yamal', date(2025, 7, 21), {'tqr_energy': 4}),
        ('Lamine Yamal', date(2025, 7, 21), {'rpe_borg_scale': 6}),
    ]


@pytest.mark.django_db
def test_sheet_failure_does_not_fail_submission(player_client, sync_on_submit):
    sync_on_submit.error = SheetSyncError(SheetSyncError.UNAVAILABLE)

    res = player_client.post(URL, {'entry_date': '2025-07-21', 'tqr_energy': 4}, format='json')

    assert res.status_code == 200
    assert DailyEntry.objects.get().tqr_energy == 4


@pytest.mark.django_db
def test_no_sheet_push_when_disabled(player_client, monkeypatch):
    def boom(config=None):
        raise AssertionError("sheet sync should not run")

    monkeypatch.setattr('sheets.receivers.get_sync', boom)

    res = player_client.post(URL, {'entry_date': '2025-07-21', 'tqr_energy': 4}, format='json')

    assert res.status_code == 200


class _RefusingGspread:
    def open_by_key(self, key):
        raise RefreshError("invalid_grant: Invalid JWT Signature.")


@pytest.mark.django_db
def test_rejected_sheet_credentials_do_not_fail_submission(player_client, google_settings, monkeypatch):
    google_settings.SHEETS_SYNC_ON_SUBMIT = True
    monkeypatch.setattr('sheets.client.authorize', lambda config: _RefusingGspread())

    res = player_client.post(URL, {'entry_date': '2025-07-21', 'tqr_energy': 4}, format='json')

    assert res.status_code == 200
    assert res.data['tqr_energy'] == 4
    assert DailyEntry.objects.get().tqr_energy == 4
