from django.core.management.base import BaseCommand, CommandError

from countries.exceptions import DataSourceUnavailable, StorageError
from countries.refresh import CountryRefresher


class Command(BaseCommand):
    help = "Fetch countries and exchange rates and refresh the stored dataset."

    def handle(self, *args, **options):
        try:
            result = CountryRefresher().refresh()
        except (DataSourceUnavailable, StorageError) as e:
            raise CommandError(f"Refresh failed: {e}") from e

        self.stdout.write(self.style.SUCCESS(
            f"Refreshed {result.processed_count} countries at {result.refreshed_at.isoformat()}"
        ))
