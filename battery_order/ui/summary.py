from typing import Any

import pandas as pd
import streamlit as st

from battery_order.models import BATTERY_TYPE_LABELS, CostBreakdown
from battery_order.pricing import DUTY_RATE, calculate_breakdown, format_money
from battery_order.state import AppState


def build_line_rows(breakdown: CostBreakdown, currency_code: str) -> list[dict[str, Any]]:
    rows = []
    for line in breakdown.lines:
        rows.append(
            {
                "Batterietyp": BATTERY_TYPE_LABELS[line.battery_type],
                "Zelltyp": line.cell_type,
                "Menge": line.quantity,
                f"Preis pro Stück ({currency_code})": format_money(line.unit_price, currency_code),
                "Total (CHF)": format_money(line.total_home),
            }
        )
    return rows


def render(state: AppState) -> None:
    breakdown = calculate_breakdown(state.ledger, state.rates)

    st.markdown("### Übersicht")
    rows = build_line_rows(breakdown, state.ledger.currency.value)
    if rows:
        df = pd.DataFrame(rows)
        st.dataframe(df, width="stretch", hide_index=True)

    duty_pct = DUTY_RATE * 100
    c1, c2, c3 = st.columns(3)
    c1.metric("Zwischensumme", format_money(breakdown.subtotal))
    c2.metric("Versand", format_money(breakdown.shipping_home))
    c3.metric(f"Zoll ({duty_pct.normalize()}%)", format_money(breakdown.duty))

    st.markdown(f"### Gesamtbetrag: {format_money(breakdown.total)}")
    st.caption("Alle Beträge in CHF umgerechnet, Zoll auf Warenwert plus Versand.")
