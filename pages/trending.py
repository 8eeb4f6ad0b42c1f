import dash
from dash import dcc, Output, Input
import dash_mantine_components as dmc

from services.api_client import get_api_client
from services.components import error_alert, loading_text, section
from services.formatting import format_change, format_currency
from services.query_state import resolve, run_query, start_query
from services.trending_metrics import load_trending, partition_trends, trend_records

dash.register_page(
    __name__,
    path='/trending',
    name='Trending',
    title='Trending Items'
)


def _trend_card(item, color):
    return dmc.Paper(
        dmc.Stack([
            dmc.Text(item.name, fw=600),
            dmc.Text(item.category, size='sm', c='dimmed'),
            dmc.Text(format_currency(item.price), size='sm'),
            dmc.Text(format_change(item.change, item.change_percent), fw=600, c=color),
            dmc.Text(f"{item.previous_qty} → {item.current_qty}", size='sm'),
        ], gap=4),
        p='md',
        radius='md',
        withBorder=True,
        style={'borderLeft': f"4px solid var(--mantine-color-{color}-6)"},
    )


def _trend_section(title, items, color, empty_message):
    if items:
        body = dmc.SimpleGrid(
            [_trend_card(item, color) for item in items],
            cols={'base': 1, 'sm': 2},
            spacing='md',
        )
    else:
        body = dmc.Text(empty_message, c='dimmed')
    return section(dmc.Stack([dmc.Title(title, order=3), body], gap='sm'))


def layout():
    return dmc.Container(
        [
            dmc.Title('Trending Items', order=2),
            dcc.Store(id='trending-query', data=start_query()),
            dcc.Store(id='trending-result'),
            dmc.Box(id='trending-content', children=loading_text('Loading trending items...')),
        ],
        size='lg',
        py='lg'
    )


@dash.callback(
    Output('trending-result', 'data'),
    Input('trending-query', 'data'),
)
def fetch_trending(query_data):
    return run_query(query_data, lambda filters: load_trending(get_api_client()))


@dash.callback(
    Output('trending-content', 'children'),
    Input('trending-query', 'data'),
    Input('trending-result', 'data'),
)
def render_trending(query_data, result_data):
    result = resolve(query_data, result_data).result
    if result.is_failed:
        return error_alert(result.reason)
    if not result.is_loaded:
        return loading_text('Loading trending items...')

    increasing, decreasing = partition_trends(trend_records(result.data))
    return dmc.Grid(
        [
            dmc.GridCol(
                _trend_section('Increasing Inventory', increasing, 'green', 'No increasing trends found'),
                span=6,
            ),
            dmc.GridCol(
                _trend_section('Decreasing Inventory', decreasing, 'red', 'No decreasing trends found'),
                span=6,
            ),
        ],
        gutter='lg',
        mt='md',
    )
