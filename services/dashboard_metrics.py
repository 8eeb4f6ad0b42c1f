from typing import Any, Dict, List, Mapping, Optional

from services.api_client import ApiClient
from services.formatting import format_currency, format_quantity, NOT_AVAILABLE
from services.models import CategoryStat
from services.query_state import FetchResult, load_resource

STATS_PATH = '/stats'
DASHBOARD_ERROR = 'Failed to load dashboard data'


def load_stats(client: ApiClient) -> FetchResult:
    return load_resource(client, STATS_PATH, None, DASHBOARD_ERROR)


def category_stats(stats: Optional[Mapping[str, Any]]) -> List[CategoryStat]:
    return [CategoryStat.from_api(raw) for raw in (stats or {}).get('categories') or []]


def category_options(stats: Optional[Mapping[str, Any]]) -> List[str]:
    """Unique category labels in order of first appearance; empty labels are dropped."""
    seen = []
    for raw in (stats or {}).get('categories') or []:
        label = raw.get('_id')
        if label and label not in seen:
            seen.append(label)
    return seen


def summarize_stats(stats: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    stats = stats or {}
    price_stats = stats.get('priceStats') or {}
    min_price = format_currency(price_stats.get('minPrice'))
    max_price = format_currency(price_stats.get('maxPrice'))

    return {
        'as_of': str(stats.get('date') or NOT_AVAILABLE),
        'total_items': format_quantity(stats.get('totalItems')),
        'store_count': format_quantity(stats.get('storeCount')),
        'avg_price': format_currency(price_stats.get('avgPrice')),
        'price_range': f"{min_price} - {max_price}",
    }
