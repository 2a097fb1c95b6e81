import logging
from decimal import Decimal, InvalidOperation
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from battery_order.config import Settings, load_settings
from battery_order.models import HOME_CURRENCY, Currency, RateSnapshot
from battery_order.providers.base import RateFetchError, RateProvider

logger = logging.getLogger(__name__)


class FrankfurterRateProvider(RateProvider):
    """
    Provider implementation for api.frankfurter.app.

    Expected endpoint pattern:
    GET https://api.frankfurter.app/latest?from=EUR&to=CHF

    Expected response to include `rates.CHF`, the amount of CHF for one unit
    of the `from` currency. One request is made per foreign currency and the
    snapshot is only built once every request has succeeded.
    """

    provider_name = "frankfurter"

    def __init__(self, settings: Settings | None = None):
        settings = settings or load_settings()
        self.endpoint = settings.rates_api_url
        self.timeout_seconds = settings.rates_timeout_seconds

        self.session = requests.Session()
        retry = Retry(
            total=2,
            connect=2,
            read=2,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    def fetch_rate(self, currency: Currency) -> Decimal:
        try:
            response = self.session.get(
                self.endpoint,
                params={"from": currency.value, "to": HOME_CURRENCY.value},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload: Any = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise RateFetchError(f"Rate request failed for {currency.value}: {exc}") from exc

        rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(rates, dict) or HOME_CURRENCY.value not in rates:
            raise RateFetchError(f"Missing rates.{HOME_CURRENCY.value} field for {currency.value}")

        raw_rate = rates[HOME_CURRENCY.value]
        if isinstance(raw_rate, bool) or not isinstance(raw_rate, (int, float, str)):
            raise RateFetchError(f"Invalid {currency.value} rate from provider")
        try:
            rate = Decimal(str(raw_rate))
        except InvalidOperation as exc:
            raise RateFetchError(f"Invalid {currency.value} rate from provider") from exc
        if not rate.is_finite() or rate <= 0:
            raise RateFetchError(f"Invalid {currency.value} rate from provider")

        return rate

    def fetch_all(self) -> RateSnapshot:
        eur = self.fetch_rate(Currency.EUR)
        usd = self.fetch_rate(Currency.USD)
        logger.info("Fetched rates from %s: EUR=%s USD=%s", self.provider_name, eur, usd)
        return RateSnapshot(eur=eur, usd=usd)
