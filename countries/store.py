import logging

from django.db import transaction

from .exceptions import CountryNotFound
from .models import Country, RefreshMetadata

logger = logging.getLogger(__name__)


class CountryStore:
    """
    Storage session provider for the write paths.

    ``atomic()`` is the scoped transaction: Django commits on a clean exit,
    rolls back on any exception and hands the connection back either way.
    """

    def __init__(self, using=None):
        self.using = using

    def atomic(self):
        return transaction.atomic(using=self.using)

    def on_commit(self, callback):
        transaction.on_commit(callback, using=self.using)

    def upsert_country(self, fields, now):
        values = dict(fields)
        name = values.pop("name")
        values["last_refreshed_at"] = now
        country, created = Country.objects.using(self.using).update_or_create(name=name, defaults=values)
        return country, created

    def write_metadata(self, total, now):
        metadata, _ = RefreshMetadata.objects.using(self.using).update_or_create(
            pk=RefreshMetadata.SINGLETON_ID,
            defaults={"total_countries": total, "last_refreshed_at": now},
        )
        return metadata

    def delete_country(self, name):
        """
        Delete every country whose name matches case-insensitively and resync
        the metadata count.

        Raises CountryNotFound before touching anything when there is no match.
        Returns the first deleted name as stored.
        """
        with self.atomic():
            countries = Country.objects.using(self.using)
            matches = countries.select_for_update().filter(name__iexact=name)
            deleted_names = list(matches.values_list("name", flat=True))
            if not deleted_names:
                raise CountryNotFound(name)

            matches.delete()
            total = countries.count()
            RefreshMetadata.objects.using(self.using).filter(pk=RefreshMetadata.SINGLETON_ID).update(
                total_countries=total
            )

        logger.info("Deleted %s (%d remaining)", ", ".join(deleted_names), total)
        return deleted_names[0]
