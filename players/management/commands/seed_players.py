from django.core.management.base import BaseCommand

from players.models import Player

DEFAULT_SQUAD = ("Jude Bellingham", "Lamine Yamal", "Vinícius Júnior")


class Command(BaseCommand):
    help = "Create players and print their form tokens."

    def add_arguments(self, parser):
        parser.add_argument('names', nargs='*', help="Player names (defaults to a demo squad)")

    def handle(self, *args, **options):
        names = options['names'] or DEFAULT_SQUAD
        for name in names:
            player = Player.objects.filter(name=name).order_by('pk').first()
            created = player is None
            if created:
                player = Player.objects.create(name=name)
            verb = "Created" if created else "Exists"
            self.stdout.write(f"{verb}: {player.name} (id={player.pk})")
            self.stdout.write(f"   token: {player.auth_token}")
            self.stdout.write(f"   form:  {player.form_path}")
        self.stdout.write(self.style.SUCCESS("Seeding finished."))
