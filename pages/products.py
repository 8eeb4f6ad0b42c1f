import dash
from dash import dcc, Output, Input, State, ctx
from dash.exceptions import PreventUpdate
import dash_mantine_components as dmc

from services.api_client import get_api_client
from services.components import error_alert, loading_text
from services.formatting import format_currency
from services.product_metrics import (
    DEFAULT_PRODUCT_FILTERS,
    load_category_options,
    load_products,
    next_product_filters,
    products_view,
    stock_text,
)
from services.query_state import QueryState, resolve, run_query, start_query

dash.register_page(
    __name__,
    path='/products',
    name='Products',
    title='Products'
)


def _product_card(product):
    return dmc.Paper(
        dmc.Stack([
            dmc.Text(product.name, fw=600),
            dmc.Text(f"SKU: {product.sku}", size='sm', c='dimmed'),
            dmc.Badge(product.category or 'Uncategorized', variant='light', size='sm'),
            dmc.Text(format_currency(product.current_price), size='lg', fw=600, c='blue'),
            dmc.Text(stock_text(product), size='sm'),
        ], gap=4),
        p='md',
        radius='md',
        withBorder=True,
    )


def layout():
    return dmc.Container(
        [
            dmc.Title('Products', order=2),
            dcc.Store(id='products-query', data=start_query(DEFAULT_PRODUCT_FILTERS)),
            dcc.Store(id='products-result'),
            dcc.Store(id='products-total-pages', data=0),
            dcc.Store(id='products-mount', data=True),
            dmc.Paper(
                dmc.Group(
                    [
                        dmc.TextInput(
                            id='products-search',
                            placeholder='Search products...',
                            debounce=300,
                            w=320,
                        ),
                        dmc.Select(
                            id='products-category',
                            placeholder='All Categories',
                            data=[],
                            clearable=True,
                            searchable=True,
                            w=260,
                        ),
                    ],
                    gap='md',
                    align='flex-end',
                ),
                p='md',
                radius='md',
                withBorder=True,
                mt='md',
            ),
            dmc.Box(id='products-content', children=loading_text('Loading products...')),
            dmc.Group(
                [
                    dmc.Button('Previous', id='products-prev', variant='light', size='sm', disabled=True),
                    dmc.Text('', id='products-page-label', size='sm'),
                    dmc.Button('Next', id='products-next', variant='light', size='sm', disabled=True),
                ],
                justify='center',
                gap='md',
                mt='lg',
            ),
        ],
        size='lg',
        py='lg'
    )


# Category options come from the stats payload, not the products payload
@dash.callback(
    Output('products-category', 'data'),
    Input('products-mount', 'data'),
)
def fill_category_options(_mounted):
    return [{'value': c, 'label': c} for c in load_category_options(get_api_client())]


@dash.callback(
    Output('products-query', 'data'),
    Input('products-search', 'value'),
    Input('products-category', 'value'),
    Input('products-prev', 'n_clicks'),
    Input('products-next', 'n_clicks'),
    State('products-query', 'data'),
    State('products-total-pages', 'data'),
    prevent_initial_call=True,
)
def update_products_query(search, category, prev_clicks, next_clicks, query_data, pages):
    state = QueryState.from_dict(query_data)
    page_delta = {'products-prev': -1, 'products-next': 1}.get(ctx.triggered_id, 0)

    filters = next_product_filters(state.filters, page_delta, search, category, pages or 0)
    if filters is None:
        raise PreventUpdate
    return state.restart(filters).to_dict()


@dash.callback(
    Output('products-result', 'data'),
    Input('products-query', 'data'),
)
def fetch_products(query_data):
    return run_query(query_data, lambda filters: load_products(get_api_client(), filters))


@dash.callback(
    Output('products-content', 'children'),
    Output('products-page-label', 'children'),
    Output('products-prev', 'disabled'),
    Output('products-next', 'disabled'),
    Output('products-total-pages', 'data'),
    Input('products-query', 'data'),
    Input('products-result', 'data'),
)
def render_products(query_data, result_data):
    state = resolve(query_data, result_data)
    result = state.result
    if result.is_failed:
        return error_alert(result.reason), '', True, True, 0
    if not result.is_loaded:
        return loading_text('Loading products...'), dash.no_update, True, True, dash.no_update

    page = int(state.filters.get('page') or 0)
    view = products_view(result.data, page)

    content = dmc.Stack(
        [
            dmc.Text(view['count_text'], size='sm', c='dimmed'),
            dmc.SimpleGrid(
                [_product_card(product) for product in view['products']],
                cols={'base': 1, 'sm': 2, 'lg': 4},
                spacing='md',
            ),
        ],
        gap='sm',
        mt='md',
    )
    return (
        content,
        view['page_label'],
        view['prev_disabled'],
        view['next_disabled'],
        view['pages'],
    )
