import dash
from dash import dcc, Output, Input
import dash_mantine_components as dmc

from services.api_client import build_url, get_api_client
from services.components import error_alert, loading_text
from services.navigation import View
from services.query_state import resolve, run_query, start_query
from services.store_metrics import filter_stores, load_stores, store_records

dash.register_page(
    __name__,
    path='/stores',
    name='Stores',
    title='Store Locator'
)


def _store_card(store):
    return dmc.Paper(
        dmc.Stack([
            dmc.Text(store.name, fw=600, size='lg'),
            dmc.Text(store.address, size='sm'),
            dmc.Text(store.city, size='sm'),
            dmc.Text(store.phone, size='sm', c='dimmed'),
            dcc.Link(
                dmc.Button('View Inventory', variant='light', size='xs'),
                href=build_url('', View.INVENTORY.path, {'store_id': store.store_id}),
            ),
        ], gap=4),
        p='md',
        radius='md',
        withBorder=True,
    )


def layout():
    return dmc.Container(
        [
            dmc.Title('Store Locator', order=2),
            dcc.Store(id='stores-query', data=start_query()),
            dcc.Store(id='stores-result'),
            dmc.TextInput(
                id='stores-search',
                placeholder='Search by store name or city...',
                w=360,
                mt='md',
            ),
            dmc.Box(id='stores-content', children=loading_text('Loading stores...')),
        ],
        size='lg',
        py='lg'
    )


@dash.callback(
    Output('stores-result', 'data'),
    Input('stores-query', 'data'),
)
def fetch_stores(query_data):
    return run_query(query_data, lambda filters: load_stores(get_api_client()))


# The search box filters the fetched list in place; it never re-fetches
@dash.callback(
    Output('stores-content', 'children'),
    Input('stores-query', 'data'),
    Input('stores-result', 'data'),
    Input('stores-search', 'value'),
)
def render_stores(query_data, result_data, search_term):
    result = resolve(query_data, result_data).result
    if result.is_failed:
        return error_alert(result.reason)
    if not result.is_loaded:
        return loading_text('Loading stores...')

    stores = filter_stores(store_records(result.data), search_term)
    if not stores:
        return dmc.Text('No stores match your search.', c='dimmed', mt='md')

    return dmc.SimpleGrid(
        [_store_card(store) for store in stores],
        cols={'base': 1, 'sm': 2, 'lg': 3},
        spacing='md',
        mt='md',
    )
