from decimal import Decimal
from typing import Any

from battery_order.models import (
    BatteryType,
    Currency,
    Ledger,
    LineItem,
    LineItemUpdate,
    SetBatteryType,
    SetCellType,
    SetQuantity,
    SetUnitPrice,
    allowed_cell_types,
)
from battery_order.pricing import to_decimal


def next_line_item_id(ledger: Ledger) -> int:
    if not ledger.line_items:
        return 1
    return max(item.id for item in ledger.line_items) + 1


def get_line_item(ledger: Ledger, item_id: int) -> LineItem | None:
    return next((item for item in ledger.line_items if item.id == item_id), None)


def add_line_item(ledger: Ledger) -> LineItem:
    item = LineItem(id=next_line_item_id(ledger))
    ledger.line_items.append(item)
    return item


def remove_line_item(ledger: Ledger, item_id: int) -> None:
    ledger.line_items = [item for item in ledger.line_items if item.id != item_id]


def update_line_item(ledger: Ledger, item_id: int, update: LineItemUpdate) -> LineItem | None:
    """
    Applies one field update to the item with the given id.

    Returns the updated item, or None when no item has that id. Changing the
    battery type resets the cell type to the new type's first allowed cell
    type when the current one is not offered for it.
    """
    item = get_line_item(ledger, item_id)
    if item is None:
        return None

    if isinstance(update, SetBatteryType):
        battery_type = BatteryType(update.battery_type)
        allowed = allowed_cell_types(battery_type)
        item.battery_type = battery_type
        if item.cell_type not in allowed:
            item.cell_type = allowed[0]
    elif isinstance(update, SetCellType):
        if update.cell_type not in allowed_cell_types(item.battery_type):
            raise ValueError(
                f"Cell type {update.cell_type!r} is not available for {item.battery_type.value}"
            )
        item.cell_type = update.cell_type
    elif isinstance(update, SetQuantity):
        item.quantity = max(1, int(update.quantity))
    elif isinstance(update, SetUnitPrice):
        item.unit_price = max(Decimal("0"), to_decimal(update.unit_price))
    else:
        raise TypeError(f"Unknown line item update: {update!r}")

    return item


def set_shipping_cost(ledger: Ledger, value: Any) -> None:
    ledger.shipping_cost = max(Decimal("0"), to_decimal(value))


def set_currency(ledger: Ledger, value: Currency | str) -> None:
    ledger.currency = Currency(value)
