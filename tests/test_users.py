import pytest

from users.models import CustomUser

REGISTER = '/api/users/auth/register/'
LOGIN = '/api/users/auth/login/'
LOGOUT = '/api/users/auth/logout/'
REFRESH = '/api/users/auth/refresh/'

NEW_COACH = {
    'email': 'Xavi@Example.com',
    'first_name': 'Xavi',
    'last_name': 'Hernández',
    'role': 'COACH',
    'password': 'tiki-taka-2009!',
    'password2': 'tiki-taka-2009!',
}


@pytest.mark.django_db
def test_admin_registers_coach(admin_client):
    res = admin_client.post(REGISTER, NEW_COACH, format='json')

    assert res.status_code == 201
    user = CustomUser.objects.get(email='xavi@example.com')
    assert user.is_coach() and not user.is_staff
    assert 'password' not in res.data


@pytest.mark.django_db
def test_duplicate_email_is_rejected(admin_client, coach_user):
    res = admin_client.post(REGISTER, {**NEW_COACH, 'email': 'COACH@example.com'}, format='json')

    assert res.status_code == 400
    assert 'email' in res.data


@pytest.mark.django_db
def test_coach_cannot_register_users(coach_client):
    assert coach_client.post(REGISTER, NEW_COACH, format='json').status_code == 403


@pytest.mark.django_db
def test_login_returns_tokens_and_profile(api_client, coach_user):
    res = api_client.post(LOGIN, {'email': 'Coach@Example.com', 'password': 'correct-horse-battery'}, format='json')

    assert res.status_code == 200
    assert res.data['access'] and res.data['refresh']
    assert res.data['user']['role'] == 'COACH'

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {res.data['access']}")
    assert api_client.get('/api/entries/overview/').status_code == 200


@pytest.mark.django_db
def test_login_with_wrong_password(api_client, coach_user):
    res = api_client.post(LOGIN, {'email': 'coach@example.com', 'password': 'nope'}, format='json')

    assert res.status_code == 401


@pytest.mark.django_db
def test_logout_blacklists_refresh_token(api_client, admin_user):
    tokens = api_client.post(LOGIN, {'email': 'admin@example.com', 'password': 'correct-horse-battery'}, format='json').data
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

    assert api_client.post(LOGOUT, {'refresh': tokens['refresh']}, format='json').status_code == 205
    assert api_client.post(REFRESH, {'refresh': tokens['refresh']}, format='json').status_code == 401


@pytest.mark.django_db
def test_logout_requires_refresh_token(admin_client):
    assert admin_client.post(LOGOUT, {}, format='json').status_code == 400


@pytest.mark.django_db
def test_profile_me(coach_client):
    res = coach_client.get('/api/users/me/')

    assert res.status_code == 200
    assert res.data['email'] == 'coach@example.com'
