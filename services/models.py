"""View models built from the statistics API payloads.

Records are immutable snapshots; a new fetch replaces them wholesale.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from services.formatting import format_price, to_number

UNKNOWN_CATEGORY = 'Unknown'


def _text(value: Any) -> str:
    return '' if value is None else str(value)


@dataclass(frozen=True)
class ProductRecord:
    sku: str
    name: str
    category: str
    current_price: Optional[float]
    store_qty: Any
    warehouse_qty: Any

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> 'ProductRecord':
        return cls(
            sku=_text(raw.get('sku')),
            name=_text(raw.get('name')),
            category=_text(raw.get('displayGroup')),
            current_price=to_number(raw.get('currentPrice')),
            store_qty=raw.get('storeQty'),
            warehouse_qty=raw.get('warehouseQty'),
        )


@dataclass(frozen=True)
class StoreRecord:
    store_id: str
    name: str
    address: str
    city: str
    phone: str

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> 'StoreRecord':
        return cls(
            store_id=_text(raw.get('store_id')),
            name=_text(raw.get('store_name')),
            address=_text(raw.get('address')),
            city=_text(raw.get('city')),
            phone=_text(raw.get('phone')),
        )


@dataclass(frozen=True)
class InventorySample:
    record_date: str
    store_id: str
    store_qty: Any

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> 'InventorySample':
        return cls(
            record_date=_text(raw.get('record_date')),
            store_id=_text(raw.get('store_id')),
            store_qty=raw.get('store_qty'),
        )


@dataclass(frozen=True)
class TrendRecord:
    sku: str
    name: str
    category: str
    price: Optional[float]
    change: Optional[float]
    change_percent: Optional[float]
    previous_qty: Any
    current_qty: Any

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> 'TrendRecord':
        return cls(
            sku=_text(raw.get('sku')),
            name=_text(raw.get('name')),
            category=_text(raw.get('displayGroup')),
            price=to_number(raw.get('price')),
            change=to_number(raw.get('change')),
            change_percent=to_number(raw.get('changePercent')),
            previous_qty=raw.get('previousQty'),
            current_qty=raw.get('currentQty'),
        )


@dataclass(frozen=True)
class CategoryStat:
    label: str
    count: int
    avg_price: str

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> 'CategoryStat':
        count = to_number(raw.get('count'))
        return cls(
            label=_text(raw.get('_id')) or UNKNOWN_CATEGORY,
            count=int(count) if count is not None else 0,
            avg_price=format_price(raw.get('avgPrice')),
        )
