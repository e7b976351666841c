# users/managers.py
from django.contrib.auth.base_user import BaseUserManager

# Admins can reach /admin/; coaches only use the API
ROLE_FLAGS = {
    'COACH': {'is_staff': False, 'is_superuser': False},
    'ADMIN': {'is_staff': True, 'is_superuser': False},
}


class CustomUserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("An email address is required")
        extra_fields.setdefault('role', 'COACH')
        for flag, value in ROLE_FLAGS.get(extra_fields['role'], ROLE_FLAGS['COACH']).items():
            extra_fields.setdefault(flag, value)

        user = self.model(email=self.normalize_email(email).lower(), **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.update(role='ADMIN', is_staff=True, is_superuser=True)
        return self.create_user(email, password, **extra_fields)
