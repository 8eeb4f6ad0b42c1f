"""
Tests for the page callbacks: products filters and paging, inventory search
validation, and the dropdowns filled after the page mounts.
Run with: python -m pytest tests/test_pages.py -v
"""
from contextvars import copy_context
from unittest.mock import MagicMock, patch

import dash
import pytest
from dash._callback_context import context_value
from dash._utils import AttributeDict
from dash.exceptions import PreventUpdate

import app  # noqa: F401  registers the pages
from pages import inventory, products
from services.api_client import ApiError
from services.inventory_metrics import VALIDATION_MESSAGE
from services.query_state import FetchResult, FetchStatus, QueryState, start_query


def _triggered_by(prop_id, callback, *args):
    """Run a callback as if ``prop_id`` had fired it."""
    def run():
        context_value.set(AttributeDict(triggered_inputs=[{'prop_id': prop_id, 'value': 1}]))
        return callback(*args)
    return copy_context().run(run)


def _loaded_products_query(page, search=None, category=None):
    state = QueryState().restart({'search': search, 'category': category, 'page': page})
    return state.commit(state.generation, FetchResult.loaded({'items': [], 'total': 100})).to_dict()


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

def test_products_layout_makes_no_request():
    with patch.object(products, 'get_api_client') as get_client:
        products.layout()
    get_client.assert_not_called()


def test_category_options_filled_on_mount(fake_client, sample_stats):
    client = fake_client({'/stats': sample_stats})
    with patch.object(products, 'get_api_client', return_value=client):
        data = products.fill_category_options(True)

    assert data == [
        {'value': 'WHISKEY', 'label': 'WHISKEY'},
        {'value': 'VODKA', 'label': 'VODKA'},
    ]


def test_category_options_failure_leaves_dropdown_empty(fake_client):
    client = fake_client({'/stats': ApiError('/stats', status=500)})
    with patch.object(products, 'get_api_client', return_value=client):
        assert products.fill_category_options(True) == []


def test_search_change_resets_page():
    query_data = _loaded_products_query(page=3)
    updated = _triggered_by(
        'products-search.value',
        products.update_products_query,
        'gin', None, None, None, query_data, 5,
    )

    state = QueryState.from_dict(updated)
    assert state.filters == {'search': 'gin', 'category': None, 'page': 0}
    assert state.generation == 2
    assert state.result.is_loading


def test_category_change_resets_page():
    query_data = _loaded_products_query(page=2, search='gin')
    updated = _triggered_by(
        'products-category.value',
        products.update_products_query,
        'gin', 'VODKA', None, None, query_data, 5,
    )
    assert QueryState.from_dict(updated).filters == {'search': 'gin', 'category': 'VODKA', 'page': 0}


def test_next_moves_one_page():
    query_data = _loaded_products_query(page=1)
    updated = _triggered_by(
        'products-next.n_clicks',
        products.update_products_query,
        None, None, None, 1, query_data, 5,
    )
    assert QueryState.from_dict(updated).filters['page'] == 2


def test_next_on_last_page_does_nothing():
    query_data = _loaded_products_query(page=4)
    with pytest.raises(PreventUpdate):
        _triggered_by(
            'products-next.n_clicks',
            products.update_products_query,
            None, None, None, 1, query_data, 5,
        )


def test_previous_on_first_page_does_nothing():
    query_data = _loaded_products_query(page=0)
    with pytest.raises(PreventUpdate):
        _triggered_by(
            'products-prev.n_clicks',
            products.update_products_query,
            None, None, 1, None, query_data, 5,
        )


def test_stale_products_result_keeps_loading():
    query_data = QueryState.from_dict(start_query({'search': None, 'category': None, 'page': 0}))
    query_data = query_data.restart({'search': 'gin', 'category': None, 'page': 0}).to_dict()
    stale = {'generation': 1, 'result': FetchResult.loaded({'items': [], 'total': 40}).to_dict()}

    content, label, prev_disabled, next_disabled, pages = products.render_products(query_data, stale)

    assert content.children[1].children == 'Loading products...'
    assert (prev_disabled, next_disabled) == (True, True)
    assert label is dash.no_update
    assert pages is dash.no_update


def test_current_products_result_renders_page():
    query_data = start_query({'search': None, 'category': None, 'page': 0})
    result = {'generation': 1, 'result': FetchResult.loaded({'items': [], 'total': 40}).to_dict()}

    _, label, prev_disabled, next_disabled, pages = products.render_products(query_data, result)

    assert label == 'Page 1 of 2'
    assert (prev_disabled, next_disabled) == (True, False)
    assert pages == 2


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------

def test_inventory_layout_makes_no_request():
    with patch.object(inventory, 'get_api_client') as get_client:
        inventory.layout(store_id='7')
    get_client.assert_not_called()


def test_store_options_filled_with_preselection(fake_client):
    client = fake_client({'/stores': {'stores': [
        {'store_id': 7, 'store_name': 'Main St'},
        {'store_id': 8, 'store_name': 'Harbor'},
    ]}})
    with patch.object(inventory, 'get_api_client', return_value=client):
        data, value = inventory.fill_store_options('7')

    assert data == [{'value': '7', 'label': 'Main St'}, {'value': '8', 'label': 'Harbor'}]
    assert value == '7'
    assert client.calls == [('/stores', {})]


def test_store_options_without_preselection_keep_value(fake_client):
    client = fake_client({'/stores': {'stores': [{'store_id': 7, 'store_name': 'Main St'}]}})
    with patch.object(inventory, 'get_api_client', return_value=client):
        _, value = inventory.fill_store_options(None)
    assert value is dash.no_update


def test_store_options_failure_leaves_dropdown_empty(fake_client):
    client = fake_client({'/stores': ApiError('/stores', status=503)})
    with patch.object(inventory, 'get_api_client', return_value=client):
        data, value = inventory.fill_store_options('7')

    assert data == []
    assert value is dash.no_update


def test_empty_search_fails_locally():
    updated = inventory.submit_inventory_search(1, '', None, QueryState().to_dict())

    state = QueryState.from_dict(updated)
    assert state.generation == 1
    assert state.result.status is FetchStatus.FAILED
    assert state.result.reason == VALIDATION_MESSAGE == 'Please enter a SKU or select a store'


def test_rejected_search_never_fetches():
    rejected = inventory.submit_inventory_search(1, '  ', None, QueryState().to_dict())
    with patch.object(inventory, 'get_api_client') as get_client:
        with pytest.raises(PreventUpdate):
            inventory.fetch_inventory(rejected)
    get_client.assert_not_called()


def test_valid_search_fetches_for_its_generation():
    submitted = inventory.submit_inventory_search(1, 'SKU1', None, QueryState().to_dict())
    client = MagicMock()
    with patch.object(inventory, 'load_inventory', return_value=FetchResult.loaded({'inventory': []})) as load:
        with patch.object(inventory, 'get_api_client', return_value=client):
            result = inventory.fetch_inventory(submitted)

    load.assert_called_once_with(client, {'sku': 'SKU1', 'store_id': None})
    assert result['generation'] == 1
    assert result['result']['status'] == FetchStatus.LOADED.value


def test_rejected_search_renders_validation_message():
    rejected = inventory.submit_inventory_search(1, '', None, QueryState().to_dict())
    content, loading = inventory.render_inventory(rejected, None)

    assert content.children == VALIDATION_MESSAGE
    assert loading is False
