"""
Small page-level widgets used by every screen.
"""

from typing import Optional

import dash_bootstrap_components as dbc
from dash import html


def page_header(title: str, button_text: Optional[str] = None, button_id=None) -> html.Div:
    children = [html.H1(title, className="page-title")]
    if button_text:
        children.append(dbc.Button(
            [html.I(className="fas fa-plus me-2"), button_text],
            id=button_id,
            color="primary",
            n_clicks=0,
        ))
    return html.Div(children, className="page-header d-flex justify-content-between align-items-center mb-4")


def error_message(message: Optional[str]):
    if not message:
        return None
    return dbc.Alert(message, color="danger", className="error-message")


def loading_state(message: str) -> html.Div:
    return html.Div([dbc.Spinner(size="sm", className="me-2"), html.Span(message)],
                    className="loading d-flex align-items-center")
