from typing import Any, List, Mapping, Optional

from services.api_client import ApiClient
from services.models import StoreRecord
from services.query_state import FetchResult, load_resource

STORES_PATH = '/stores'
STORES_ERROR = 'Failed to load stores'


def load_stores(client: ApiClient) -> FetchResult:
    return load_resource(client, STORES_PATH, None, STORES_ERROR)


def store_records(payload: Optional[Mapping[str, Any]]) -> List[StoreRecord]:
    return [StoreRecord.from_api(raw) for raw in (payload or {}).get('stores') or []]


def filter_stores(stores: List[StoreRecord], term: Optional[str]) -> List[StoreRecord]:
    """Case-insensitive substring match on store name or city, over the fetched list."""
    needle = (term or '').lower()
    if not needle:
        return list(stores)
    return [
        store for store in stores
        if needle in store.name.lower() or needle in store.city.lower()
    ]
