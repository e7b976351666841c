from datetime import date
from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from players.models import Player
from tests.fakes import FakeSheetClient
from users.models import CustomUser
from wellness.services import upsert_entry


@pytest.mark.django_db
def test_seed_players_prints_tokens():
    out = StringIO()

    call_command('seed_players', 'Pedri', 'Gavi', stdout=out)

    assert sorted(Player.objects.values_list('name', flat=True)) == ['Gavi', 'Pedri']
    pedri = Player.objects.get(name='Pedri')
    assert str(pedri.auth_token) in out.getvalue()
    assert f'/{pedri.auth_token}' in out.getvalue()


@pytest.mark.django_db
def test_seed_players_is_repeatable():
    call_command('seed_players', 'Pedri', stdout=StringIO())
    out = StringIO()

    call_command('seed_players', 'Pedri', stdout=out)

    assert Player.objects.count() == 1
    assert 'Exists: Pedri' in out.getvalue()


@pytest.mark.django_db
def test_seed_players_default_squad():
    call_command('seed_players', stdout=StringIO())

    assert Player.objects.count() == 3


@pytest.mark.django_db
def test_create_admin():
    call_command('create_admin', email='Boss@Example.com', password='s3cret-pass', stdout=StringIO())

    user = CustomUser.objects.get()
    assert user.email == 'boss@example.com'
    assert user.is_admin() and user.is_superuser
    assert user.check_password('s3cret-pass')


@pytest.mark.django_db
def test_create_admin_leaves_existing_user(admin_user):
    out = StringIO()

    call_command('create_admin', email='ADMIN@example.com', password='other', stdout=out)

    assert CustomUser.objects.count() == 1
    assert 'already exists' in out.getvalue()


@pytest.mark.django_db
def test_create_admin_needs_credentials():
    with pytest.raises(CommandError):
        call_command('create_admin', email='', password='', stdout=StringIO())


@pytest.mark.django_db
def test_sync_sheet_command(google_settings, monkeypatch, player):
    client = FakeSheetClient()
    monkeypatch.setattr('sheets.services.open_client', lambda config, spreadsheet_id=None: client)
    upsert_entry(player, date(2025, 7, 21), {'tqr_energy': 4})
    out = StringIO()

    call_command('sync_sheet', '--start-date', '2025-07-21', stdout=out)

    assert 'Synced 1 players / 1 entries' in out.getvalue()
    assert 'https://docs.google.com/spreadsheets/d/sheet-123/edit' in out.getvalue()


@pytest.mark.django_db
def test_sync_sheet_command_not_configured():
    with pytest.raises(CommandError, match='not_configured'):
        call_command('sync_sheet', stdout=StringIO())
