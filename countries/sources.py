import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

import requests
from django.conf import settings
from requests.exceptions import RequestException

from .exceptions import DataSourceUnavailable

logger = logging.getLogger(__name__)

COUNTRIES_SOURCE = "RestCountries API"
EXCHANGE_SOURCE = "Exchange Rate API"


class CountrySource:
    """
    Client for the two external datasets a refresh needs: the country catalog
    and the exchange-rate table. Every failure surfaces as DataSourceUnavailable;
    nothing is retried.
    """

    def __init__(self, countries_url=None, rates_url=None, timeout=None):
        self.countries_url = countries_url or settings.COUNTRIES_API_URL
        self.rates_url = rates_url or settings.EXCHANGE_RATE_API_URL
        self.timeout = timeout if timeout is not None else settings.EXTERNAL_API_TIMEOUT

    def _get_json(self, source, url):
        try:
            resp = requests.get(url, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except (RequestException, ValueError) as e:
            logger.error("Failed to fetch %s: %s", source, e)
            raise DataSourceUnavailable(source, e) from e

    def fetch_countries(self):
        data = self._get_json(COUNTRIES_SOURCE, self.countries_url)
        if not isinstance(data, list):
            logger.error("Unexpected %s response: %s", COUNTRIES_SOURCE, type(data).__name__)
            raise DataSourceUnavailable(COUNTRIES_SOURCE, "response is not a list of countries")
        logger.info("Fetched %d countries", len(data))
        return data

    def fetch_exchange_rates(self):
        data = self._get_json(EXCHANGE_SOURCE, self.rates_url)
        rates = data.get("rates") if isinstance(data, dict) else None
        if not isinstance(rates, dict):
            logger.error("Invalid %s response: no rates mapping", EXCHANGE_SOURCE)
            raise DataSourceUnavailable(EXCHANGE_SOURCE, "invalid exchange rate response")
        logger.info("Fetched exchange rates for %d currencies", len(rates))
        return rates

    def fetch_all(self):
        """
        Fetch both datasets concurrently.

        Returns (countries, rates). The first failure is raised as soon as it
        happens; the other request is left to finish in the background.
        """
        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="country-source")
        try:
            countries_future = executor.submit(self.fetch_countries)
            rates_future = executor.submit(self.fetch_exchange_rates)
            done, _ = wait([countries_future, rates_future], return_when=FIRST_EXCEPTION)
            for future in (countries_future, rates_future):
                if future in done and future.exception() is not None:
                    raise future.exception()
            return countries_future.result(), rates_future.result()
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
