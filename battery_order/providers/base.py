from abc import ABC, abstractmethod

from battery_order.models import RateSnapshot


class RateFetchError(RuntimeError):
    """Raised when exchange rates cannot be fetched or parsed."""


class RateProvider(ABC):
    provider_name: str

    @abstractmethod
    def fetch_all(self) -> RateSnapshot:
        """Returns CHF per EUR and CHF per USD, or raises RateFetchError."""
        raise NotImplementedError
