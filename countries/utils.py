import random
from datetime import datetime, timezone

GDP_MULTIPLIER_MIN = 1000
GDP_MULTIPLIER_MAX = 2000


def get_now():
    """Return current UTC datetime (aware)."""
    return datetime.now(timezone.utc)


def make_multiplier():
    """Uniform draw in [GDP_MULTIPLIER_MIN, GDP_MULTIPLIER_MAX)."""
    return GDP_MULTIPLIER_MIN + random.random() * (GDP_MULTIPLIER_MAX - GDP_MULTIPLIER_MIN)


def extract_currency_code(currencies):
    """
    Return the code of the first listed currency, or None.

    Only the first currency is considered; countries with several currencies
    are stored under the first one.
    """
    if not currencies or not isinstance(currencies, (list, tuple)):
        return None
    first_currency = currencies[0] or {}
    if not isinstance(first_currency, dict):
        return None
    return first_currency.get("code") or None


def lookup_exchange_rate(currency_code, rates):
    if not currency_code:
        return None
    raw = (rates or {}).get(currency_code)
    if not raw:
        return None
    try:
        rate = float(raw)
    except (TypeError, ValueError):
        return None
    return rate if rate > 0 else None


def calculate_estimated_gdp(population, exchange_rate):
    """
    population * random multiplier / exchange_rate, rounded to 2 places.

    Returns None when the rate is missing or zero. The multiplier is redrawn
    on every call, so identical inputs give a different figure each refresh.
    """
    if exchange_rate is None or exchange_rate == 0:
        return None
    multiplier = make_multiplier()
    return round((population * multiplier) / exchange_rate, 2)


def derive_country_fields(item, rates):
    """Map one raw catalog entry plus the rate table to the stored Country fields."""
    population = item.get("population") or 0
    currency_code = extract_currency_code(item.get("currencies"))

    if currency_code is None:
        exchange_rate = None
        estimated_gdp = 0
    else:
        exchange_rate = lookup_exchange_rate(currency_code, rates)
        estimated_gdp = calculate_estimated_gdp(population, exchange_rate)

    return {
        "name": item.get("name"),
        "capital": item.get("capital") or None,
        "region": item.get("region") or None,
        "population": population,
        "currency_code": currency_code,
        "exchange_rate": exchange_rate,
        "estimated_gdp": estimated_gdp,
        "flag_url": item.get("flag") or None,
    }
