import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pandas as pd

from services.api_client import ApiClient
from services.models import InventorySample, StoreRecord
from services.query_state import FetchResult
from services.store_metrics import load_stores

logger = logging.getLogger(__name__)

INVENTORY_PATH = '/inventory'
ITEMS_PATH = '/items'
INVENTORY_ERROR = 'Failed to load inventory data'
VALIDATION_MESSAGE = 'Please enter a SKU or select a store'


class ValidationError(ValueError):
    """Raised before any request is made when a query cannot be sent."""


def _clean(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def validate_inventory_query(sku, store_id) -> Dict[str, Optional[str]]:
    sku = _clean(sku)
    store_id = _clean(store_id)
    if not sku and not store_id:
        raise ValidationError(VALIDATION_MESSAGE)
    return {'sku': sku, 'store_id': store_id}


def load_inventory(client: ApiClient, filters: Mapping[str, Any]) -> FetchResult:
    """
    Run an inventory lookup for a SKU, a store, or both.

    The display name is only resolved for SKU lookups that returned rows;
    a failure of either request fails the whole lookup.
    """
    try:
        params = validate_inventory_query(filters.get('sku'), filters.get('store_id'))
    except ValidationError as exc:
        return FetchResult.failed(str(exc))

    result = client.fetch(INVENTORY_PATH, params)
    if not result.ok:
        logger.error("%s: %s", INVENTORY_ERROR, result.error)
        return FetchResult.failed(INVENTORY_ERROR)

    inventory = (result.value or {}).get('inventory') or []
    item_name = None
    if params['sku'] and inventory:
        item_result = client.fetch(ITEMS_PATH, {'search': params['sku']})
        if not item_result.ok:
            logger.error("%s: %s", INVENTORY_ERROR, item_result.error)
            return FetchResult.failed(INVENTORY_ERROR)
        items = (item_result.value or {}).get('items') or []
        if items:
            item_name = items[0].get('name')

    logger.info("Loaded %d inventory rows for sku=%s store=%s", len(inventory), params['sku'], params['store_id'])
    return FetchResult.loaded({
        'inventory': inventory,
        'item_name': item_name,
        'sku': params['sku'],
        'store_id': params['store_id'],
    })


def inventory_title(item_name: Optional[str], store_id: Optional[str]) -> str:
    if item_name:
        return f"Inventory for {item_name}"
    if store_id:
        return f"Inventory for Store #{store_id}"
    return 'Inventory Results'


def inventory_samples(payload: Optional[Mapping[str, Any]]) -> List[InventorySample]:
    return [InventorySample.from_api(raw) for raw in (payload or {}).get('inventory') or []]


def inventory_series(samples: List[InventorySample]) -> pd.DataFrame:
    """Chart series ordered by record date; unparseable quantities count as 0."""
    if not samples:
        return pd.DataFrame(columns=['date', 'quantity', 'store_id'])

    df = pd.DataFrame(
        {
            'date': [s.record_date for s in samples],
            'quantity': [s.store_qty for s in samples],
            'store_id': [s.store_id for s in samples],
        }
    )
    df['quantity'] = pd.to_numeric(df['quantity'], errors='coerce').fillna(0).astype(int)
    df['_sort_key'] = pd.to_datetime(df['date'], errors='coerce')
    df = df.sort_values('_sort_key', kind='stable', na_position='last')
    return df.drop(columns='_sort_key').reset_index(drop=True)


def store_options(stores_payload: Optional[Mapping[str, Any]]) -> List[Dict[str, str]]:
    stores = [StoreRecord.from_api(raw) for raw in (stores_payload or {}).get('stores') or []]
    return [
        {'value': store.store_id, 'label': store.name or f"Store #{store.store_id}"}
        for store in stores
        if store.store_id
    ]


def load_store_choices(client: ApiClient, preselect=None) -> Tuple[List[Dict[str, str]], Optional[str]]:
    """
    Store dropdown options and the preselected store id.

    A failed ``/stores`` request yields no options. The preselection is only
    returned when it names one of the loaded stores.
    """
    stores = load_stores(client)
    options = store_options(stores.data) if stores.is_loaded else []
    preselect = _clean(preselect)
    selected = preselect if any(o['value'] == preselect for o in options) else None
    return options, selected
