import logging
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from battery_order.models import Ledger, RateSnapshot
from battery_order.providers.base import RateProvider
from battery_order.providers.frankfurter import FrankfurterRateProvider

logger = logging.getLogger(__name__)

RATES_UNAVAILABLE_MESSAGE = "Wechselkurse konnten nicht geladen werden."
SESSION_KEY = "battery_order_state"


class RateStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class AppState:
    ledger: Ledger = field(default_factory=Ledger)
    rates: RateSnapshot = field(default_factory=RateSnapshot)
    status: RateStatus = RateStatus.LOADING
    error: str = ""


def refresh_rates(state: AppState, provider: RateProvider) -> bool:
    """
    Fetches a fresh rate snapshot into the state.

    Only the rates and the status/error fields change. On failure the previous
    snapshot is kept and the user-facing message is set; nothing is raised.
    """
    state.status = RateStatus.LOADING
    state.error = ""
    try:
        snapshot = provider.fetch_all()
    except Exception as exc:
        provider_name = getattr(provider, "provider_name", type(provider).__name__)
        logger.warning("Rate refresh via %s failed: %s", provider_name, exc)
        state.status = RateStatus.ERROR
        state.error = RATES_UNAVAILABLE_MESSAGE
        return False

    state.rates = snapshot
    state.status = RateStatus.READY
    return True


def get_app_state(
    session: MutableMapping[str, Any],
    provider: RateProvider | None = None,
) -> AppState:
    """Returns the session's state, creating it and loading rates on first use."""
    state = session.get(SESSION_KEY)
    if state is None:
        state = AppState()
        session[SESSION_KEY] = state
        refresh_rates(state, provider or FrankfurterRateProvider())
    return state
