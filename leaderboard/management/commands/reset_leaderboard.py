from django.core.management.base import BaseCommand, CommandError

from leaderboard.services import reset_leaderboard


class Command(BaseCommand):
    help = "Delete every score from the leaderboard"

    def add_arguments(self, parser):
        parser.add_argument(
            "--noinput",
            "--no-input",
            action="store_false",
            dest="interactive",
            help="Do not prompt for confirmation.",
        )

    def handle(self, *args, **options):
        if options["interactive"]:
            answer = input("This will delete every leaderboard score. Type 'yes' to continue: ")
            if answer.strip().lower() != "yes":
                raise CommandError("Leaderboard reset cancelled.")

        deleted = reset_leaderboard()
        self.stdout.write(self.style.SUCCESS(f"Leaderboard has been reset ({deleted} scores removed)."))
