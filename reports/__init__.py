"""
Dashboard statistics computed from the lease and payment collections.
"""

from reports.income import (
    DashboardStats,
    dashboard_stats,
    month_label,
    monthly_income,
    normalize_amount,
    payment_status,
)
