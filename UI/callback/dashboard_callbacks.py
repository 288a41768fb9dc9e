import logging
from datetime import date

from dash import Input, Output

from api.envelope import ApiError, unwrap_items
from reports.income import DashboardStats, dashboard_stats, monthly_income, payment_status
from UI.app import app
from UI.components.shared import error_message
from UI.config import settings
from UI.constants import DASHBOARD_LOAD_ERROR
from UI.pages.dashboard_layout import DashboardIds, income_figure, render_stats, status_figure
from UI.state.registry import registry

logger = logging.getLogger(__name__)


def load_dashboard(today=None):
    """
    Fetch leases and payments and compute everything the dashboard shows.

    On failure the cards show zeros, the charts stay empty-but-labelled and
    an error message is returned.

    Returns:
        tuple: (stats, monthly income rows, status slices, error message or None)
    """
    today = today or date.today()
    client = registry.client
    size = settings.DASHBOARD_PAGE_SIZE
    try:
        leases = unwrap_items(client.leases.list(0, size, ""))
        payments = unwrap_items(client.payments.list(0, size, ""))
    except ApiError as e:
        logger.error("Error loading dashboard data (%s): %s", e.kind, e.detail or e.message)
        stats = DashboardStats()
        return stats, monthly_income([], today), payment_status(stats), DASHBOARD_LOAD_ERROR

    stats = dashboard_stats(leases, payments, today)
    return stats, monthly_income(payments, today), payment_status(stats), None


@app.callback(
    [Output(DashboardIds.ACTIVE_RENTALS, 'children'),
     Output(DashboardIds.COLLECTED, 'children'),
     Output(DashboardIds.OVERDUE, 'children'),
     Output(DashboardIds.INCOME_CHART, 'figure'),
     Output(DashboardIds.STATUS_CHART, 'figure'),
     Output(DashboardIds.STATUS, 'children')],
    Input(DashboardIds.MOUNT, 'data'),
)
def render_dashboard(_mounted):
    stats, monthly, status, error = load_dashboard()
    active, collected, overdue = render_stats(stats)
    return active, collected, overdue, income_figure(monthly), status_figure(status), error_message(error)
