"""Shared fixtures for the calculator test suite."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from battery_order.models import Ledger, LineItem, RateSnapshot


@pytest.fixture
def parity_rates() -> RateSnapshot:
    """Default 1:1 snapshot used before the first successful fetch."""
    return RateSnapshot()


@pytest.fixture
def live_rates() -> RateSnapshot:
    return RateSnapshot(eur=Decimal("0.95"), usd=Decimal("0.88"))


@pytest.fixture
def empty_ledger() -> Ledger:
    return Ledger(line_items=[])


@pytest.fixture
def three_item_ledger() -> Ledger:
    return Ledger(line_items=[LineItem(id=1), LineItem(id=4), LineItem(id=2)])


def make_response(payload=None, status_code=200, json_error=None):
    """Builds a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def response_factory():
    return make_response
