"""Management command to cleanup old outbox notifications."""

from django.core.management.base import BaseCommand

from stampman.models import Notification


class Command(BaseCommand):
    help = "Remove notifications older than NOTIFICATION_RETENTION_DAYS"

    def add_arguments(self, parser):
        parser.add_argument(
            "--days",
            type=int,
            default=None,
            help="Override NOTIFICATION_RETENTION_DAYS setting",
        )

    def handle(self, *args, **options):
        # delete() also counts cascaded read receipts; report notifications only
        _, per_model = Notification.cleanup_old(days=options["days"])
        deleted_count = per_model.get(Notification._meta.label, 0)
        self.stdout.write(
            self.style.SUCCESS(f"Deleted {deleted_count} old notifications.")
        )
