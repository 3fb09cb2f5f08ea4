import logging
import threading
from dataclasses import dataclass
from datetime import datetime

from django.db import DatabaseError, connections

from . import utils
from .exceptions import StorageError
from .signals import refresh_completed
from .sources import CountrySource
from .store import CountryStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RefreshResult:
    processed_count: int
    refreshed_at: datetime


def _send_refresh_completed(result):
    try:
        responses = refresh_completed.send_robust(
            sender=CountryRefresher,
            total_countries=result.processed_count,
            refreshed_at=result.refreshed_at,
        )
        for receiver, response in responses:
            if isinstance(response, Exception):
                logger.error(
                    "refresh_completed receiver %r failed: %s",
                    receiver,
                    response,
                    exc_info=(type(response), response, response.__traceback__),
                )
    finally:
        # This thread is outside Django's request cycle; release what receivers opened.
        connections.close_all()


def notify_refresh_completed(result):
    """Fire refresh_completed on a daemon thread and return without waiting for it."""
    thread = threading.Thread(
        target=_send_refresh_completed,
        args=(result,),
        name="refresh-completed",
        daemon=True,
    )
    thread.start()
    return thread


class CountryRefresher:
    """
    One refresh cycle: fetch both datasets, derive per-country fields, upsert
    every country and the metadata row in a single transaction, then notify.
    """

    def __init__(self, source=None, store=None, notifier=None):
        self.source = source or CountrySource()
        self.store = store or CountryStore()
        self.notifier = notifier or notify_refresh_completed

    def refresh(self):
        # Fails with DataSourceUnavailable before any storage access.
        countries_data, rates = self.source.fetch_all()

        now = utils.get_now()
        processed_count = 0
        try:
            with self.store.atomic():
                for item in countries_data:
                    fields = utils.derive_country_fields(item, rates)
                    self.store.upsert_country(fields, now)
                    processed_count += 1

                self.store.write_metadata(processed_count, now)

                result = RefreshResult(processed_count=processed_count, refreshed_at=now)
                self.store.on_commit(lambda: self._notify(result))
        except DatabaseError as e:
            logger.error("Refresh rolled back after %d countries: %s", processed_count, e)
            raise StorageError("Could not store refreshed countries") from e

        logger.info("Refreshed %d countries", processed_count)
        return result

    def _notify(self, result):
        try:
            self.notifier(result)
        except Exception:
            logger.exception("Post-refresh notification failed")
