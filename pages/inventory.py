import dash
from dash import dcc, dash_table, Output, Input, State
from dash.exceptions import PreventUpdate
import dash_mantine_components as dmc

from services.api_client import get_api_client
from services.charts import build_inventory_chart
from services.components import error_alert, section
from services.inventory_metrics import (
    ValidationError,
    inventory_samples,
    inventory_series,
    inventory_title,
    load_inventory,
    load_store_choices,
    validate_inventory_query,
)
from services.query_state import FetchResult, QueryState, resolve, run_query

dash.register_page(
    __name__,
    path='/inventory',
    name='Inventory',
    title='Inventory Tracker'
)


def layout(store_id=None, **kwargs):
    return dmc.Container(
        [
            dmc.Title('Inventory Tracker', order=2),
            dcc.Store(id='inventory-query', data=QueryState().to_dict()),
            dcc.Store(id='inventory-result'),
            dcc.Store(id='inventory-preselect', data=store_id),
            dmc.Paper(
                dmc.Group(
                    [
                        dmc.TextInput(
                            id='inventory-sku',
                            label='Product SKU:',
                            placeholder='Enter SKU...',
                            w=240,
                        ),
                        dmc.Select(
                            id='inventory-store',
                            label='Store:',
                            placeholder='Select a store',
                            data=[],
                            value=None,
                            clearable=True,
                            searchable=True,
                            w=280,
                        ),
                        dmc.Button('Search', id='inventory-search', variant='filled', size='sm'),
                    ],
                    gap='xl',
                    align='flex-end',
                ),
                p='md',
                radius='md',
                withBorder=True,
                mt='md',
            ),
            dmc.Box(id='inventory-content'),
        ],
        size='lg',
        py='lg'
    )


@dash.callback(
    Output('inventory-store', 'data'),
    Output('inventory-store', 'value'),
    Input('inventory-preselect', 'data'),
)
def fill_store_options(preselect):
    options, selected = load_store_choices(get_api_client(), preselect)
    return options, (selected if selected is not None else dash.no_update)


@dash.callback(
    Output('inventory-query', 'data'),
    Input('inventory-search', 'n_clicks'),
    State('inventory-sku', 'value'),
    State('inventory-store', 'value'),
    State('inventory-query', 'data'),
    prevent_initial_call=True,
)
def submit_inventory_search(n_clicks, sku, store_id, query_data):
    state = QueryState.from_dict(query_data).restart({'sku': sku, 'store_id': store_id})
    try:
        validate_inventory_query(sku, store_id)
    except ValidationError as exc:
        # Rejected locally; the fetch callback never sees a loading state
        state = state.commit(state.generation, FetchResult.failed(str(exc)))
    return state.to_dict()


@dash.callback(
    Output('inventory-result', 'data'),
    Input('inventory-query', 'data'),
    prevent_initial_call=True,
)
def fetch_inventory(query_data):
    if not QueryState.from_dict(query_data).result.is_loading:
        raise PreventUpdate
    return run_query(query_data, lambda filters: load_inventory(get_api_client(), filters))


@dash.callback(
    Output('inventory-content', 'children'),
    Output('inventory-search', 'loading'),
    Input('inventory-query', 'data'),
    Input('inventory-result', 'data'),
)
def render_inventory(query_data, result_data):
    result = resolve(query_data, result_data).result
    if result.is_loading:
        return dash.no_update, True
    if result.is_failed:
        return error_alert(result.reason), False
    if not result.is_loaded:
        return None, False

    payload = result.data or {}
    samples = inventory_samples(payload)
    if not samples:
        return dmc.Text('No inventory records found.', c='dimmed', mt='md'), False

    title = inventory_title(payload.get('item_name'), payload.get('store_id'))
    series = inventory_series(samples)

    content = dmc.Stack(
        [
            dmc.Title(title, order=3),
            section(
                dcc.Graph(
                    id='inventory-history-chart',
                    figure=build_inventory_chart(series, title),
                    config={'displayModeBar': False},
                ),
            ),
            section(
                dash_table.DataTable(
                    id='inventory-table',
                    columns=[
                        {'name': 'Date', 'id': 'record_date'},
                        {'name': 'Store', 'id': 'store_id'},
                        {'name': 'Quantity', 'id': 'store_qty'},
                    ],
                    data=[
                        {'record_date': s.record_date, 'store_id': s.store_id, 'store_qty': s.store_qty}
                        for s in samples
                    ],
                    page_size=20,
                    sort_action='native',
                    style_cell={'textAlign': 'left', 'fontFamily': 'inherit'},
                ),
            ),
        ],
        gap='lg',
        mt='md',
    )
    return content, False
