# users/models.py
from django.db import models
from django.contrib.auth.models import AbstractUser
from django.db.models.functions import Lower
from .managers import CustomUserManager

class CustomUser(AbstractUser):
    """
    Staff account (administrator or coach). Athletes are not users:
    they authenticate with their player token instead.
    """
    ROLE_CHOICES = (
        ('ADMIN', 'Admin'),
        ('COACH', 'Coach'),
    )

    username = None
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='COACH')

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name', 'role']

    objects = CustomUserManager()

    class Meta:
        constraints = [
            models.UniqueConstraint(Lower('email'), name='uniq_customuser_email_ci')
        ]

    def __str__(self):
        return self.email

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def is_coach(self): return self.role == 'COACH'
    def is_admin(self): return self.role == 'ADMIN' or self.is_superuser
