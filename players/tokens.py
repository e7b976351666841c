# players/tokens.py
import logging
import re

from .models import Player

logger = logging.getLogger(__name__)

TOKEN_RE = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$',
    re.IGNORECASE,
)


class InvalidToken(Exception):
    MALFORMED = 'malformed'
    UNKNOWN = 'unknown'

    def __init__(self, reason):
        super().__init__(f"player token is {reason}")
        self.reason = reason


def is_well_formed(token):
    return isinstance(token, str) and bool(TOKEN_RE.match(token))


def resolve_player(token):
    """
    Return the Player owning ``token``.

    The shape is checked before any query so malformed tokens never reach
    the database. Raises InvalidToken for malformed or unknown tokens.
    """
    if not is_well_formed(token):
        raise InvalidToken(InvalidToken.MALFORMED)
    try:
        return Player.objects.get(auth_token=token)
    except Player.DoesNotExist:
        raise InvalidToken(InvalidToken.UNKNOWN) from None
