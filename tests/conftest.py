from __future__ import annotations

import pytest
import requests
from django.conf import settings

import countries.sources as sources


class FakeResponse:
    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self._payload = payload
        self.status_code = status_code
        self._invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error", response=self)

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


SAMPLE_COUNTRIES = [
    {
        "name": "Nigeria",
        "capital": "Abuja",
        "region": "Africa",
        "population": 206139589,
        "flag": "https://flagcdn.com/ng.svg",
        "currencies": [{"code": "NGN", "name": "Nigerian naira", "symbol": "₦"}],
    },
    {
        "name": "Ghana",
        "capital": "Accra",
        "region": "Africa",
        "population": 31072940,
        "flag": "https://flagcdn.com/gh.svg",
        "currencies": [{"code": "GHS", "name": "Ghanaian cedi", "symbol": "₵"}],
    },
    {
        "name": "Antarctica",
        "region": "Polar",
        "population": 1000,
        "flag": "https://flagcdn.com/aq.svg",
    },
    {
        "name": "Atlantis",
        "capital": "Poseidonia",
        "region": "Europe",
        "population": 5000,
        "flag": "https://example.com/atlantis.svg",
        "currencies": [{"code": "ATL"}],
    },
]

SAMPLE_RATES = {"USD": 1, "NGN": 1600.23, "GHS": 15.34, "EUR": 0.92}


@pytest.fixture
def install_sources(monkeypatch):
    """
    Route requests.get inside countries.sources to canned responses.

    Each argument is either a payload or an exception instance to raise.
    Returns the list of requested URLs.
    """
    calls = []

    def install(countries=SAMPLE_COUNTRIES, rates=None, rates_payload=None):
        if rates_payload is None and not isinstance(rates, Exception):
            rates_payload = {"result": "success", "base_code": "USD", "rates": SAMPLE_RATES if rates is None else rates}

        def fake_get(url, timeout=None):
            calls.append((url, timeout))
            if url == settings.COUNTRIES_API_URL:
                outcome = countries
            elif url == settings.EXCHANGE_RATE_API_URL:
                outcome = rates if isinstance(rates, Exception) else rates_payload
            else:
                raise AssertionError(f"unexpected url {url}")
            if isinstance(outcome, Exception):
                raise outcome
            if isinstance(outcome, FakeResponse):
                return outcome
            return FakeResponse(outcome)

        monkeypatch.setattr(sources.requests, "get", fake_get)
        return calls

    return install


class StaticSource:
    """In-memory stand-in for CountrySource."""

    def __init__(self, countries, rates, error=None):
        self.countries = countries
        self.rates = rates
        self.error = error
        self.calls = 0

    def fetch_all(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.countries), dict(self.rates)


@pytest.fixture
def static_source():
    return StaticSource(SAMPLE_COUNTRIES, SAMPLE_RATES)


@pytest.fixture
def make_source():
    return StaticSource


@pytest.fixture
def fake_response():
    return FakeResponse
