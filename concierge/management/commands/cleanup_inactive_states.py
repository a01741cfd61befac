from django.conf import settings
from django.core.management.base import BaseCommand

from concierge.tasks import delete_inactive_states


class Command(BaseCommand):
    help = 'Deletes conversation state that has been inactive longer than the retention period.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=settings.BOT_STATE_RETENTION_DAYS,
            help='Delete state idle for more than this many days.',
        )

    def handle(self, *args, **options):
        count = delete_inactive_states(options['days'])
        self.stdout.write(self.style.SUCCESS(f'Successfully deleted {count} stale conversation states.'))
