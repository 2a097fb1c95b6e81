import logging
import os
from dataclasses import dataclass

DEFAULT_RATES_API_URL = "https://api.frankfurter.app/latest"
DEFAULT_TIMEOUT_SECONDS = 10
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    rates_api_url: str = DEFAULT_RATES_API_URL
    rates_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Reads optional overrides from the environment (see .env.example)."""
    api_url = os.getenv("RATES_API_URL", "").strip() or DEFAULT_RATES_API_URL

    raw_timeout = os.getenv("RATES_TIMEOUT_SECONDS", "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
    except ValueError:
        raise RuntimeError("RATES_TIMEOUT_SECONDS must be a number of seconds.") from None
    if timeout <= 0:
        raise RuntimeError("RATES_TIMEOUT_SECONDS must be greater than zero.")

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if log_level not in logging.getLevelNamesMapping():
        # basicConfig only accepts registered level names.
        log_level = "INFO"

    return Settings(
        rates_api_url=api_url.rstrip("/"),
        rates_timeout_seconds=timeout,
        log_level=log_level,
    )


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
