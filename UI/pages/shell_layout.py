"""
Application shell: top navigation bar and the page container that the
routing callback fills for the current URL.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from UI.constants import APP_TITLE, NAV_ITEMS

URL = 'app-url'
PAGE_CONTAINER = 'page-container'


def navbar() -> dbc.Navbar:
    links = [
        dbc.NavItem(dbc.NavLink(
            [html.I(className=f"{icon} me-2"), label],
            href=path,
            active="exact",
        ))
        for label, path, icon in NAV_ITEMS
    ]
    return dbc.Navbar(
        dbc.Container([
            dbc.NavbarBrand(APP_TITLE, href="/"),
            dbc.Nav(links, navbar=True, className="ms-auto"),
        ], fluid=True),
        color="dark",
        dark=True,
        className="mb-4",
    )


def layout() -> html.Div:
    return html.Div([
        dcc.Location(id=URL, refresh=False),
        navbar(),
        dbc.Container(id=PAGE_CONTAINER, fluid=True, className="page-content"),
    ])
