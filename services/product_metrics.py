import math
from typing import Any, Dict, List, Mapping, Optional, Tuple

from services.api_client import ApiClient
from services.config import PAGE_SIZE
from services.dashboard_metrics import STATS_PATH, category_options
from services.formatting import format_quantity, to_number
from services.models import ProductRecord
from services.query_state import FetchResult, load_resource

ITEMS_PATH = '/items'
PRODUCTS_ERROR = 'Failed to load products'
CATEGORIES_ERROR = 'Failed to load product categories'

DEFAULT_PRODUCT_FILTERS = {
    'search': None,
    'category': None,
    'page': 0,
}


def build_product_params(filters: Mapping[str, Any]) -> Dict[str, Any]:
    page = int(filters.get('page') or 0)
    return {
        'search': filters.get('search') or None,
        'category': filters.get('category') or None,
        'skip': page * PAGE_SIZE,
        'limit': PAGE_SIZE,
    }


def load_products(client: ApiClient, filters: Mapping[str, Any]) -> FetchResult:
    return load_resource(client, ITEMS_PATH, build_product_params(filters), PRODUCTS_ERROR)


def load_category_options(client: ApiClient) -> List[str]:
    """Category dropdown labels, taken from the stats payload; empty when it fails."""
    result = load_resource(client, STATS_PATH, None, CATEGORIES_ERROR)
    return category_options(result.data) if result.is_loaded else []


def total_pages(total_items, page_size: int = PAGE_SIZE) -> int:
    total = to_number(total_items)
    if not total or total < 0:
        return 0
    return math.ceil(total / page_size)


def pagination_controls(page: int, pages: int) -> Tuple[bool, bool]:
    """(previous disabled, next disabled) for the given page index."""
    return page <= 0, page >= pages - 1


def step_page(page: int, delta: int, pages: int) -> int:
    candidate = page + delta
    if 0 <= candidate < pages:
        return candidate
    return page


def next_product_filters(
    filters: Mapping[str, Any],
    page_delta: int,
    search=None,
    category=None,
    pages: int = 0,
) -> Optional[Dict[str, Any]]:
    """
    Filters for the next products query, or None when nothing changes.

    A non-zero ``page_delta`` pages within the current results; otherwise the
    search text and category are applied and paging restarts at 0.
    """
    if page_delta:
        page = int(filters.get('page') or 0)
        new_page = step_page(page, page_delta, pages)
        if new_page == page:
            return None
        return {**filters, 'page': new_page}

    return {
        'search': search or None,
        'category': category or None,
        'page': 0,
    }


def stock_text(product: ProductRecord) -> str:
    return (
        f"In Stock: {format_quantity(product.store_qty)} "
        f"(Warehouse: {format_quantity(product.warehouse_qty)})"
    )


def products_view(payload: Mapping[str, Any], page: int) -> Dict[str, Any]:
    payload = payload or {}
    products = [ProductRecord.from_api(raw) for raw in payload.get('items') or []]
    total = int(to_number(payload.get('total')) or 0)
    pages = total_pages(total)
    prev_disabled, next_disabled = pagination_controls(page, pages)

    return {
        'products': products,
        'total': total,
        'pages': pages,
        'count_text': f"Showing {len(products)} of {total} products",
        'page_label': f"Page {page + 1} of {pages}",
        'prev_disabled': prev_disabled,
        'next_disabled': next_disabled,
    }
