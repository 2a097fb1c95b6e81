from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

from battery_order.models import (
    HOME_CURRENCY,
    CostBreakdown,
    Currency,
    Ledger,
    LineItem,
    LineTotal,
    RateSnapshot,
)

# Customs duty applied to goods plus shipping, in home currency.
DUTY_RATE = Decimal("0.081")

MONEY_STEP = Decimal("0.01")
RATE_STEP = Decimal("0.0001")


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() keeps the short repr (2.5 -> "2.5") instead of the binary expansion.
        value = str(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Not a decimal amount: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Not a finite amount: {value!r}")
    return result


def convert_to_home(amount: Decimal, currency: Currency | str, rates: RateSnapshot) -> Decimal:
    amount = to_decimal(amount)
    if currency == HOME_CURRENCY:
        return amount
    if currency == Currency.EUR:
        return amount * rates.eur
    if currency == Currency.USD:
        return amount * rates.usd
    raise ValueError(f"Unsupported currency: {currency!r}")


def line_total(item: LineItem, currency: Currency, rates: RateSnapshot) -> Decimal:
    return item.quantity * convert_to_home(item.unit_price, currency, rates)


def subtotal(line_items: Iterable[LineItem], currency: Currency, rates: RateSnapshot) -> Decimal:
    return sum((line_total(item, currency, rates) for item in line_items), Decimal("0"))


def calculate_breakdown(ledger: Ledger, rates: RateSnapshot) -> CostBreakdown:
    """
    Totals for the ledger in home currency.

    Duty is charged on goods plus shipping. Nothing is rounded here; rounding
    happens only when values are formatted for display.
    """
    lines = [
        LineTotal(
            item_id=item.id,
            battery_type=item.battery_type,
            cell_type=item.cell_type,
            quantity=item.quantity,
            unit_price=item.unit_price,
            total_home=line_total(item, ledger.currency, rates),
        )
        for item in ledger.line_items
    ]
    goods = sum((line.total_home for line in lines), Decimal("0"))
    shipping_home = convert_to_home(ledger.shipping_cost, ledger.currency, rates)
    base = goods + shipping_home
    duty = base * DUTY_RATE

    return CostBreakdown(
        lines=lines,
        subtotal=goods,
        shipping_home=shipping_home,
        base=base,
        duty=duty,
        total=base + duty,
    )


def round_money(value: Decimal) -> Decimal:
    return to_decimal(value).quantize(MONEY_STEP, rounding=ROUND_HALF_UP)


def format_money(value: Decimal, currency: Currency = HOME_CURRENCY) -> str:
    return f"{round_money(value)} {Currency(currency).value}"


def format_rate(value: Decimal) -> str:
    return str(to_decimal(value).quantize(RATE_STEP, rounding=ROUND_HALF_UP))
