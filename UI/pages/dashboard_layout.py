"""
Dashboard: headline cards, trailing-year income chart and this month's
collection status.
"""

import dash_bootstrap_components as dbc
import plotly.graph_objs as go
from dash import dcc, html

from UI.components.shared import loading_state, page_header
from UI.constants import PAID_LABEL, OVERDUE_LABEL
from UI.utils.text_utils import format_currency


class DashboardIds:
    MOUNT = 'dashboard-mount'
    STATUS = 'dashboard-status'
    ACTIVE_RENTALS = 'dashboard-active-rentals'
    COLLECTED = 'dashboard-collected'
    OVERDUE = 'dashboard-overdue'
    INCOME_CHART = 'dashboard-income-chart'
    STATUS_CHART = 'dashboard-status-chart'


STATUS_COLORS = {PAID_LABEL: '#ffffff', OVERDUE_LABEL: '#ef4444'}


def stat_card(title: str, value_id: str, icon: str) -> dbc.Card:
    return dbc.Card(dbc.CardBody([
        html.Div([html.I(className=f"{icon} me-2"), html.Span(title)], className="stat-title"),
        html.H3("-", id=value_id, className="stat-value"),
    ]), className="dashboard-card")


def income_figure(monthly):
    figure = go.Figure(go.Scatter(
        x=[m["month"] for m in monthly],
        y=[m["income"] for m in monthly],
        mode="lines+markers",
        line=dict(color="#ffffff", width=2),
        hovertemplate="%{x}<br>$%{y}k<extra></extra>",
    ))
    figure.update_layout(
        template="plotly_dark",
        margin=dict(l=40, r=20, t=20, b=40),
        yaxis_title="Income (thousands)",
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )
    return figure


def status_figure(status):
    labels = [s["name"] for s in status]
    figure = go.Figure(go.Pie(
        labels=labels,
        values=[s["value"] for s in status],
        hole=0.5,
        marker=dict(colors=[STATUS_COLORS.get(label) for label in labels]),
    ))
    figure.update_layout(
        template="plotly_dark",
        margin=dict(l=20, r=20, t=20, b=20),
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return figure


def render_stats(stats):
    return str(stats.active_rentals), format_currency(stats.collected_payments), str(stats.overdue_payments)


def layout() -> html.Div:
    return html.Div([
        dcc.Store(id=DashboardIds.MOUNT, data=True),
        page_header("Dashboard"),
        html.Div(loading_state("Loading..."), id=DashboardIds.STATUS),
        dbc.Row([
            dbc.Col(stat_card("Active leases", DashboardIds.ACTIVE_RENTALS, "fas fa-file-signature"), md=4),
            dbc.Col(stat_card("Collected this month", DashboardIds.COLLECTED, "fas fa-dollar-sign"), md=4),
            dbc.Col(stat_card("Overdue payments", DashboardIds.OVERDUE, "fas fa-exclamation-triangle"), md=4),
        ], className="mb-4"),
        dbc.Row([
            dbc.Col(dbc.Card([
                dbc.CardHeader("Monthly income"),
                dbc.CardBody(dcc.Graph(id=DashboardIds.INCOME_CHART, config={"displayModeBar": False})),
            ], className="dashboard-card"), md=8),
            dbc.Col(dbc.Card([
                dbc.CardHeader("Payment status"),
                dbc.CardBody(dcc.Graph(id=DashboardIds.STATUS_CHART, config={"displayModeBar": False})),
            ], className="dashboard-card"), md=4),
        ]),
    ], className="dashboard")
