"""
Shared constants for the rental console.

UI text used by more than one screen lives here so every resource screen
reads the same way.
"""

APP_TITLE = "Prometheus"

# Navigation entries: (label, path, icon)
NAV_ITEMS = [
    ("Dashboard", "/", "fas fa-chart-line"),
    ("Properties", "/properties", "fas fa-building"),
    ("Tenants", "/tenants", "fas fa-users"),
    ("Leases", "/leases", "fas fa-file-signature"),
    ("Payments", "/payments", "fas fa-money-bill"),
]

# Table
SEARCH_PLACEHOLDER = "Search"
COLUMN_PANEL_TITLE = "Show columns"
COLUMN_FILTER_LABEL = "Column filters"
ACTIONS_HEADER = "Actions"

ACTION_VIEW = "view"
ACTION_EDIT = "edit"
ACTION_DELETE = "delete"
ROW_ACTION_LABELS = {
    ACTION_VIEW: ("View", "fas fa-eye"),
    ACTION_EDIT: ("Edit", "fas fa-pen"),
    ACTION_DELETE: ("Delete", "fas fa-trash"),
}

# Dialogs
CREATE_BUTTON_LABEL = "Create"
UPDATE_BUTTON_LABEL = "Update"
CANCEL_BUTTON_LABEL = "Cancel"
CLOSE_BUTTON_LABEL = "Close"
CONFIRM_DELETE_TEMPLATE = "Are you sure you want to delete {name}?"

# Dashboard
MONTH_ABBREVIATIONS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                       "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
TRAILING_MONTHS = 12
PAID_LABEL = "Paid"
OVERDUE_LABEL = "Overdue"
DASHBOARD_LOAD_ERROR = "Could not load the statistics"
