"""
Apply migrations, retrying while the database is still coming up.

Usage:
    python manage.py migrate_with_retry
    python manage.py migrate_with_retry --attempts 5 --delay 2
"""
import logging
import time

from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError
from django.db import OperationalError

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Runs migrate, retrying with a delay if the database is not reachable yet'

    def add_arguments(self, parser):
        parser.add_argument(
            '--attempts',
            type=int,
            default=3,
            help='Total number of migrate attempts (default: 3)',
        )
        parser.add_argument(
            '--delay',
            type=float,
            default=5.0,
            help='Seconds to wait between attempts (default: 5)',
        )

    def handle(self, *args, **options):
        attempts = max(options['attempts'], 1)
        delay = max(options['delay'], 0)

        for attempt in range(1, attempts + 1):
            try:
                logger.info("Applying database migrations (attempt %s of %s)", attempt, attempts)
                call_command('migrate', interactive=False, verbosity=options.get('verbosity', 1))
            except OperationalError as exc:
                if attempt == attempts:
                    logger.critical("Database migration failed after %s attempts", attempts, exc_info=exc)
                    raise CommandError(f"Database migration failed after {attempts} attempts: {exc}") from exc
                logger.warning("Migration attempt %s failed, retrying in %ss: %s", attempt, delay, exc)
                time.sleep(delay)
            else:
                self.stdout.write(self.style.SUCCESS('Database migrations applied'))
                return
