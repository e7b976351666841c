# players/models.py
import uuid

from django.db import models


class Player(models.Model):
    """
    An athlete. The auth token is the only credential the player ever uses:
    it is generated on creation and never changes.
    """
    name = models.CharField(max_length=120)
    auth_token = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Lets a resolved player stand in as request.user for DRF permissions
    is_authenticated = True
    is_anonymous = False

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def token(self):
        return str(self.auth_token)

    @property
    def form_path(self):
        return f"/{self.auth_token}"
