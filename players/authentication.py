import logging

from rest_framework import authentication, exceptions

from .tokens import InvalidToken, resolve_player

logger = logging.getLogger(__name__)

BODY_TOKEN_FIELDS = ('auth_token', 'authToken')


class PlayerTokenAuthentication(authentication.BaseAuthentication):
    """
    Authenticates athletes by their player token.

    Token is read from ``Authorization: Bearer <token>``; when the header is
    absent the ``auth_token`` (or ``authToken``) body field is used. Malformed
    and unknown tokens fail with the same 401 so callers can't tell them apart.
    """
    keyword = 'Bearer'
    failure_message = 'Invalid or unknown player token.'

    def authenticate(self, request):
        token = self._token_from_header(request)
        if token is None:
            token = self._token_from_body(request)
        if token is None:
            return None

        try:
            player = resolve_player(token)
        except InvalidToken as exc:
            logger.debug("Rejected player token (%s)", exc.reason)
            raise exceptions.AuthenticationFailed(self.failure_message)
        return (player, token)

    def authenticate_header(self, request):
        return self.keyword

    def _token_from_header(self, request):
        auth = authentication.get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:
            raise exceptions.AuthenticationFailed(self.failure_message)
        try:
            return auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed(self.failure_message)

    def _token_from_body(self, request):
        data = getattr(request, 'data', None)
        if not hasattr(data, 'get'):
            return None
        for field in BODY_TOKEN_FIELDS:
            value = data.get(field)
            if value is not None:
                return str(value)
        return None
