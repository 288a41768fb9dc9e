import logging

from dash import Input, Output, html

from UI.app import app
from UI.pages.dashboard_layout import layout as dashboard_layout
from UI.pages.resource_layout import create_resource_layout
from UI.pages.shell_layout import PAGE_CONTAINER, URL
from UI.screens import SCREENS

logger = logging.getLogger(__name__)

SCREENS_BY_PATH = {screen.path: screen for screen in SCREENS.values()}


def page_for_path(pathname):
    path = (pathname or "/").rstrip("/") or "/"
    if path in ("/", "/dashboard"):
        return dashboard_layout()
    screen = SCREENS_BY_PATH.get(path)
    if screen is not None:
        return create_resource_layout(screen)
    logger.info("No page for path %s", pathname)
    return html.Div([
        html.H1("Page not found", className="page-title"),
        html.P(f"Nothing lives at {pathname}."),
    ], className="not-found")


@app.callback(Output(PAGE_CONTAINER, 'children'), Input(URL, 'pathname'))
def route(pathname):
    return page_for_path(pathname)
