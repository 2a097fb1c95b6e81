from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class BatteryType(str, Enum):
    LIPO = "lipo"
    LI_ION_6S = "li-ion-6s"
    LI_ION_6S2P = "li-ion-6s2p"
    LI_ION_6S3P = "li-ion-6s3p"


class Currency(str, Enum):
    CHF = "CHF"
    EUR = "EUR"
    USD = "USD"


HOME_CURRENCY = Currency.CHF

BATTERY_TYPE_LABELS: dict[BatteryType, str] = {
    BatteryType.LIPO: "LiPo",
    BatteryType.LI_ION_6S: "Li-Ion 6S",
    BatteryType.LI_ION_6S2P: "Li-Ion 6S2P",
    BatteryType.LI_ION_6S3P: "Li-Ion 6S3P",
}

# First entry is the default cell type for the battery type.
CELL_TYPES: dict[BatteryType, tuple[str, ...]] = {
    BatteryType.LIPO: ("P45B", "P50B"),
    BatteryType.LI_ION_6S: ("P45B", "P50B"),
    BatteryType.LI_ION_6S2P: ("P45B", "P50B"),
    BatteryType.LI_ION_6S3P: ("P45B", "P50B"),
}


def allowed_cell_types(battery_type: BatteryType) -> tuple[str, ...]:
    return CELL_TYPES[BatteryType(battery_type)]


@dataclass
class LineItem:
    id: int
    battery_type: BatteryType = BatteryType.LIPO
    cell_type: str = "P45B"
    quantity: int = 1
    unit_price: Decimal = Decimal("0")


@dataclass
class Ledger:
    line_items: list[LineItem] = field(default_factory=lambda: [LineItem(id=1)])
    shipping_cost: Decimal = Decimal("0")
    currency: Currency = Currency.CHF


@dataclass(frozen=True)
class RateSnapshot:
    """CHF per one unit of EUR and USD."""

    eur: Decimal = Decimal("1")
    usd: Decimal = Decimal("1")


@dataclass(frozen=True)
class SetBatteryType:
    battery_type: BatteryType


@dataclass(frozen=True)
class SetCellType:
    cell_type: str


@dataclass(frozen=True)
class SetQuantity:
    quantity: int


@dataclass(frozen=True)
class SetUnitPrice:
    unit_price: Decimal


LineItemUpdate = SetBatteryType | SetCellType | SetQuantity | SetUnitPrice


@dataclass(frozen=True)
class LineTotal:
    item_id: int
    battery_type: BatteryType
    cell_type: str
    quantity: int
    unit_price: Decimal
    total_home: Decimal


@dataclass(frozen=True)
class CostBreakdown:
    lines: list[LineTotal]
    subtotal: Decimal
    shipping_home: Decimal
    base: Decimal
    duty: Decimal
    total: Decimal
