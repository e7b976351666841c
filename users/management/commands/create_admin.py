import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = "Create the administrator account if it does not exist yet."

    def add_arguments(self, parser):
        parser.add_argument('--email', default=os.environ.get('ADMIN_EMAIL'))
        parser.add_argument('--password', default=os.environ.get('ADMIN_PASSWORD'))
        parser.add_argument('--first-name', default='Admin')
        parser.add_argument('--last-name', default='')

    def handle(self, *args, **options):
        email = (options['email'] or '').strip().lower()
        password = options['password']
        if not email or not password:
            raise CommandError("Both --email and --password (or ADMIN_EMAIL / ADMIN_PASSWORD) are required.")

        User = get_user_model()
        existing = User.objects.filter(email__iexact=email).first()
        if existing:
            self.stdout.write(self.style.WARNING(f"User already exists: {existing.email} ({existing.role})"))
            return

        user = User.objects.create_superuser(
            email=email,
            password=password,
            first_name=options['first_name'],
            last_name=options['last_name'],
            role='ADMIN',
        )
        self.stdout.write(self.style.SUCCESS(f"Admin user created: {user.email}"))
