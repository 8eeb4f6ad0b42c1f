import logging

import dash
from dash import Dash, dcc, Output, Input, State
import dash_mantine_components as dmc

from services import config
from services.navigation import View

# Enforce React 18 for DMC 2.x
try:
    from dash._dash_renderer import _set_react_version
    _set_react_version("18.2.0")
except (ImportError, AttributeError):
    pass

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

APP_TITLE = "DABS Data Explorer"

app = Dash(__name__, use_pages=True, title=APP_TITLE, suppress_callback_exceptions=True)


def sidebar_links():
    return [
        dmc.NavLink(label=view.label, href=view.path, id=view.nav_id, variant="subtle", fw=500)
        for view in View
    ]


# Expose Flask server for Gunicorn
server = app.server

app.layout = dmc.MantineProvider(
    theme={
        "fontFamily": "'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif",
        "headings": {
            "fontFamily": "'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif",
            "fontWeight": "600"
        }
    },
    children=dmc.AppShell(
        id="appshell",
        padding="sm",
        navbar={
            "width": 220,
            "breakpoint": "sm",
            "collapsed": {"mobile": True, "desktop": False},
        },
        header={"height": 60},
        footer={"height": 40},
        children=[
            dcc.Location(id="url", refresh=False),
            dmc.AppShellHeader(
                dmc.Group(
                    [
                        dmc.Burger(id="nav-burger", opened=False, size="sm", hiddenFrom="sm"),
                        dmc.Title(APP_TITLE, order=3),
                    ],
                    h="100%",
                    px="md",
                    align="center",
                )
            ),
            dmc.AppShellNavbar(
                id="app-navbar",
                p="md",
                children=dmc.Stack(sidebar_links(), gap="xs"),
            ),
            dmc.AppShellMain(
                dmc.Container(dash.page_container, size="responsive", px="md", py="lg"),
            ),
            dmc.AppShellFooter(
                dmc.Text(f"{APP_TITLE} - Data updated daily", size="sm", c="dimmed", ta="center", py="xs"),
            ),
        ],
    ),
)


@app.callback(
    Output("appshell", "navbar"),
    Input("nav-burger", "opened"),
    State("appshell", "navbar"),
    prevent_initial_call=False,
)
def toggle_navbar(opened, navbar):
    navbar["collapsed"] = {"mobile": not opened, "desktop": False}
    return navbar


@app.callback(
    [Output(view.nav_id, "active") for view in View],
    Input("url", "pathname"),
)
def highlight_active_view(pathname):
    active = View.from_path(pathname)
    logger.debug("Active view: %s", active.name)
    return [view is active for view in View]


if __name__ == '__main__':
    app.run(debug=True)
