"""Tests for the Streamlit page and its display helpers."""

from decimal import Decimal
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from battery_order.models import (
    BatteryType,
    Currency,
    Ledger,
    LineItem,
    RateSnapshot,
)
from battery_order.pricing import calculate_breakdown
from battery_order.providers.base import RateFetchError, RateProvider
from battery_order.state import RATES_UNAVAILABLE_MESSAGE, SESSION_KEY, RateStatus
from battery_order.ui.order_items import _currency_label
from battery_order.ui.summary import build_line_rows

APP_PATH = str(Path(__file__).resolve().parents[1] / "app.py")
LIVE = RateSnapshot(eur=Decimal("0.95"), usd=Decimal("0.88"))


class QueuedProvider(RateProvider):
    """Returns or raises the queued results in order."""

    provider_name = "queued"

    def __init__(self, *results):
        self.results = list(results)

    def fetch_all(self) -> RateSnapshot:
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class TestCurrencyLabel:
    """Tests for the currency selector labels."""

    def test_chf_is_plain_code(self):
        assert _currency_label(Currency.CHF, LIVE) == "CHF"

    def test_foreign_currencies_show_four_decimal_rate(self):
        assert _currency_label(Currency.EUR, LIVE) == "EUR (1 EUR = 0.9500 CHF)"
        assert _currency_label(Currency.USD, LIVE) == "USD (1 USD = 0.8800 CHF)"


class TestBuildLineRows:
    """Tests for build_line_rows()."""

    def test_rows_follow_ledger_with_home_totals(self):
        ledger = Ledger(
            line_items=[
                LineItem(id=1, quantity=2, unit_price=Decimal("10")),
                LineItem(
                    id=2,
                    battery_type=BatteryType.LI_ION_6S2P,
                    cell_type="P50B",
                    quantity=1,
                    unit_price=Decimal("3.333"),
                ),
            ],
            currency=Currency.EUR,
        )

        rows = build_line_rows(calculate_breakdown(ledger, LIVE), "EUR")

        assert rows == [
            {
                "Batterietyp": "LiPo",
                "Zelltyp": "P45B",
                "Menge": 2,
                "Preis pro Stück (EUR)": "10.00 EUR",
                "Total (CHF)": "19.00 CHF",
            },
            {
                "Batterietyp": "Li-Ion 6S2P",
                "Zelltyp": "P50B",
                "Menge": 1,
                "Preis pro Stück (EUR)": "3.33 EUR",
                "Total (CHF)": "3.17 CHF",
            },
        ]

    def test_empty_ledger_has_no_rows(self):
        rows = build_line_rows(calculate_breakdown(Ledger(line_items=[]), LIVE), "CHF")
        assert rows == []


class TestCalculatorPage:
    """End-to-end runs of app.py with a stand-in rate provider."""

    @pytest.fixture
    def app(self):
        at = AppTest.from_file(APP_PATH, default_timeout=30)
        at.session_state["rate_provider"] = QueuedProvider(LIVE, RateFetchError("HTTP 503"))
        return at.run()

    def test_currency_selector_shows_loaded_rates(self, app):
        assert not app.exception
        assert app.selectbox(key="currency").options == [
            "CHF",
            "EUR (1 EUR = 0.9500 CHF)",
            "USD (1 USD = 0.8800 CHF)",
        ]

    def test_total_and_failed_refresh(self, app):
        """Entering the CHF scenario shows 48.65; a failed refresh keeps rates and inputs."""
        app.number_input(key="quantity_1").set_value(10)
        app.number_input(key="unit_price_1").set_value(2.5)
        app.number_input(key="shipping_cost").set_value(20.0)
        app.run()

        assert not app.exception
        assert "### Bestellpositionen" in [md.value for md in app.markdown]
        assert "### Gesamtbetrag: 48.65 CHF" in [md.value for md in app.markdown]
        assert len(app.warning) == 0

        refresh = next(b for b in app.button if b.label == "Wechselkurse aktualisieren")
        refresh.click().run()

        state = app.session_state[SESSION_KEY]
        assert [w.value for w in app.warning] == [RATES_UNAVAILABLE_MESSAGE]
        assert state.status == RateStatus.ERROR
        assert state.rates == LIVE
        assert state.ledger.line_items[0].quantity == 10
        assert "### Gesamtbetrag: 48.65 CHF" in [md.value for md in app.markdown]
