import streamlit as st

from battery_order.ledger import (
    add_line_item,
    remove_line_item,
    set_currency,
    set_shipping_cost,
    update_line_item,
)
from battery_order.models import (
    BATTERY_TYPE_LABELS,
    BatteryType,
    Currency,
    LineItem,
    RateSnapshot,
    SetBatteryType,
    SetCellType,
    SetQuantity,
    SetUnitPrice,
    allowed_cell_types,
)
from battery_order.pricing import format_rate, to_decimal
from battery_order.state import AppState

BATTERY_TYPES = list(BatteryType)
CURRENCIES = list(Currency)


def _currency_label(currency: Currency, rates: RateSnapshot) -> str:
    if currency == Currency.EUR:
        return f"EUR (1 EUR = {format_rate(rates.eur)} CHF)"
    if currency == Currency.USD:
        return f"USD (1 USD = {format_rate(rates.usd)} CHF)"
    return currency.value


def _render_line_item(state: AppState, item: LineItem) -> bool:
    """Renders one row of inputs. Returns True when the row was removed."""
    type_col, cell_col, qty_col, price_col, remove_col = st.columns([3, 2, 2, 2, 1])

    with type_col:
        battery_type = st.selectbox(
            "Batterietyp",
            options=BATTERY_TYPES,
            index=BATTERY_TYPES.index(item.battery_type),
            format_func=lambda value: BATTERY_TYPE_LABELS[value],
            key=f"battery_type_{item.id}",
        )
        update_line_item(state.ledger, item.id, SetBatteryType(battery_type))

    with cell_col:
        cell_options = list(allowed_cell_types(item.battery_type))
        cell_type = st.selectbox(
            "Zelltyp",
            options=cell_options,
            index=cell_options.index(item.cell_type),
            key=f"cell_type_{item.id}",
        )
        update_line_item(state.ledger, item.id, SetCellType(cell_type))

    with qty_col:
        quantity = st.number_input(
            "Menge",
            min_value=1,
            value=int(item.quantity),
            step=1,
            key=f"quantity_{item.id}",
        )
        update_line_item(state.ledger, item.id, SetQuantity(int(quantity)))

    with price_col:
        unit_price = st.number_input(
            f"Preis pro Stück ({state.ledger.currency.value})",
            min_value=0.0,
            value=float(item.unit_price),
            step=0.01,
            format="%.2f",
            key=f"unit_price_{item.id}",
        )
        update_line_item(state.ledger, item.id, SetUnitPrice(to_decimal(unit_price)))

    with remove_col:
        st.write("")
        if st.button("🗑️", key=f"remove_{item.id}", help="Position entfernen"):
            remove_line_item(state.ledger, item.id)
            return True

    return False


def render(state: AppState) -> None:
    ledger = state.ledger

    settings_col1, settings_col2 = st.columns(2)
    with settings_col1:
        currency = st.selectbox(
            "Währung",
            options=CURRENCIES,
            index=CURRENCIES.index(ledger.currency),
            format_func=lambda value: _currency_label(value, state.rates),
            key="currency",
        )
        set_currency(ledger, currency)
    with settings_col2:
        shipping_cost = st.number_input(
            f"Versandkosten ({ledger.currency.value})",
            min_value=0.0,
            value=float(ledger.shipping_cost),
            step=0.01,
            format="%.2f",
            key="shipping_cost",
        )
        set_shipping_cost(ledger, shipping_cost)

    st.markdown("### Bestellpositionen")
    if not ledger.line_items:
        st.caption("Keine Positionen erfasst.")

    for item in list(ledger.line_items):
        with st.container(border=True):
            if _render_line_item(state, item):
                st.rerun()

    if st.button("➕ Position hinzufügen", type="primary"):
        add_line_item(ledger)
        st.rerun()
