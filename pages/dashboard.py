import dash
from dash import dcc, dash_table, Output, Input
import dash_mantine_components as dmc

from services.api_client import get_api_client
from services.charts import build_category_chart
from services.components import error_alert, loading_text, section, stat_card
from services.dashboard_metrics import category_stats, load_stats, summarize_stats
from services.query_state import resolve, run_query, start_query

dash.register_page(__name__, path='/', name='Dashboard', title='Dashboard')


def layout():
    return dmc.Container(
        [
            dmc.Title('Dashboard', order=2),
            dcc.Store(id='dashboard-query', data=start_query()),
            dcc.Store(id='dashboard-result'),
            dmc.Box(id='dashboard-content', children=loading_text('Loading dashboard...')),
        ],
        size='lg',
        py='lg',
    )


@dash.callback(
    Output('dashboard-result', 'data'),
    Input('dashboard-query', 'data'),
)
def fetch_dashboard(query_data):
    return run_query(query_data, lambda filters: load_stats(get_api_client()))


@dash.callback(
    Output('dashboard-content', 'children'),
    Input('dashboard-query', 'data'),
    Input('dashboard-result', 'data'),
)
def render_dashboard(query_data, result_data):
    result = resolve(query_data, result_data).result
    if result.is_failed:
        return error_alert(result.reason)
    if not result.is_loaded:
        return loading_text('Loading dashboard...')

    stats = result.data or {}
    summary = summarize_stats(stats)
    categories = category_stats(stats)

    return dmc.Stack(
        [
            dmc.Text(f"Data as of: {summary['as_of']}", c='dimmed'),
            dmc.Grid(
                [
                    stat_card('Total Products', summary['total_items']),
                    stat_card('Total Stores', summary['store_count']),
                    stat_card('Avg Price', summary['avg_price']),
                    stat_card('Price Range', summary['price_range']),
                ],
                gutter='lg',
            ),
            section(
                dcc.Graph(
                    id='dashboard-category-chart',
                    figure=build_category_chart(categories),
                    config={'displayModeBar': False},
                ),
            ),
            section(
                dmc.Stack([
                    dmc.Text('Categories', fw=600),
                    dash_table.DataTable(
                        id='dashboard-category-table',
                        columns=[
                            {'name': 'Category', 'id': 'label'},
                            {'name': 'Products', 'id': 'count'},
                            {'name': 'Avg Price ($)', 'id': 'avg_price'},
                        ],
                        data=[
                            {'label': c.label, 'count': c.count, 'avg_price': c.avg_price}
                            for c in categories
                        ],
                        page_size=15,
                        sort_action='native',
                        style_cell={'textAlign': 'left', 'fontFamily': 'inherit'},
                    ),
                ]),
            ),
        ],
        gap='lg',
        mt='md',
    )
