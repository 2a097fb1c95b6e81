from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

from battery_order.config import configure_logging, load_settings
from battery_order.providers.frankfurter import FrankfurterRateProvider
from battery_order.state import AppState, get_app_state, refresh_rates
from battery_order.ui import order_items, summary


# Load environment variables from local .env file.
load_dotenv(dotenv_path=Path(__file__).parent / ".env")


st.set_page_config(page_title="Akku Bestellkalkulator", page_icon="🔋", layout="wide")


def _get_provider() -> FrankfurterRateProvider:
    if "rate_provider" not in st.session_state:
        st.session_state["rate_provider"] = FrankfurterRateProvider(load_settings())
    return st.session_state["rate_provider"]


def _render_rate_status(state: AppState) -> None:
    if state.error:
        st.warning(state.error)

    if st.button("Wechselkurse aktualisieren"):
        with st.spinner("Lade Wechselkurse..."):
            refresh_rates(state, _get_provider())
        st.rerun()


def main() -> None:
    configure_logging(load_settings())

    st.title("🔋 Akku Bestellkalkulator")

    with st.spinner("Lade Wechselkurse..."):
        state = get_app_state(st.session_state, _get_provider())

    _render_rate_status(state)
    order_items.render(state)
    st.divider()
    summary.render(state)


if __name__ == "__main__":
    main()
