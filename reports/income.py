"""
Income and collection statistics for the dashboard.

Only payments flagged as rent (``pagoRenta``) count towards income. Dates are
parsed leniently; a payment whose date cannot be parsed is left out of every
monthly bucket.
"""

import math
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping

import pandas as pd

from UI.constants import MONTH_ABBREVIATIONS, OVERDUE_LABEL, PAID_LABEL, TRAILING_MONTHS

_NON_NUMERIC = re.compile(r"[^\d.-]")


@dataclass(frozen=True)
class DashboardStats:
    active_rentals: int = 0
    collected_payments: float = 0.0
    overdue_payments: int = 0
    paid_count: int = 0


def normalize_amount(value: Any) -> float:
    """
    Amount as a float. Numbers pass through, strings are stripped of anything
    that is not a digit, dot or minus sign, everything else is 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0
    if isinstance(value, str):
        match = re.match(r"-?\d*\.?\d+", _NON_NUMERIC.sub("", value))
        if match is None:
            return 0.0
        return float(match.group(0))
    return 0.0


def month_label(value) -> str:
    """'Jan. 2026' for any date-like value."""
    stamp = pd.Timestamp(value)
    return f"{MONTH_ABBREVIATIONS[stamp.month - 1]}. {stamp.year}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _rent_payments(payments: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Rent payments as a frame with parsed dates and numeric amounts."""
    rows = [
        {
            "alquilerId": p.get("alquilerId"),
            "fechaPago": p.get("fechaPago"),
            "amount": normalize_amount(p.get("montoMensual")),
        }
        for p in payments
        if p.get("pagoRenta")
    ]
    df = pd.DataFrame(rows, columns=["alquilerId", "fechaPago", "amount"])
    df["fechaPago"] = pd.to_datetime(df["fechaPago"], errors="coerce", format="ISO8601", utc=True).dt.tz_localize(None)
    return df.dropna(subset=["fechaPago"])


def _month_period(today: date) -> pd.Period:
    return pd.Timestamp(today).to_period("M")


def rent_collected_this_month(payments: Iterable[Mapping[str, Any]], today: date) -> Dict[Any, float]:
    """Rent collected in ``today``'s month, summed per lease id."""
    df = _rent_payments(payments)
    current = df[df["fechaPago"].dt.to_period("M") == _month_period(today)]
    if current.empty:
        return {}
    return current.groupby("alquilerId")["amount"].sum().to_dict()


def dashboard_stats(leases: Iterable[Mapping[str, Any]], payments: Iterable[Mapping[str, Any]],
                    today: date) -> DashboardStats:
    """
    Headline numbers for the dashboard cards.

    Args:
        leases: lease records (``activo`` marks active ones)
        payments: payment records
        today: reference date that defines "this month"

    Returns:
        DashboardStats: active leases, rent collected this month, and active
        leases without a rent payment this month
    """
    active_ids = [lease.get("id") for lease in leases if lease.get("activo")]
    collected = rent_collected_this_month(payments, today)
    overdue = sum(1 for lease_id in active_ids if lease_id not in collected)
    return DashboardStats(
        active_rentals=len(active_ids),
        collected_payments=float(sum(collected.values())),
        overdue_payments=overdue,
        paid_count=len(collected),
    )


def monthly_income(payments: Iterable[Mapping[str, Any]], today: date,
                   months: int = TRAILING_MONTHS) -> List[Dict[str, Any]]:
    """
    Rent income per month for the trailing ``months`` months, oldest first.

    Income is expressed in thousands, rounded. Months without payments are
    present with income 0.
    """
    periods = pd.period_range(end=_month_period(today), periods=months, freq="M")
    df = _rent_payments(payments)
    totals = df.groupby(df["fechaPago"].dt.to_period("M"))["amount"].sum()
    totals = totals.reindex(periods, fill_value=0.0)
    return [
        {"month": month_label(period.to_timestamp()), "income": _round_half_up(amount / 1000)}
        for period, amount in totals.items()
    ]


def payment_status(stats: DashboardStats) -> List[Dict[str, Any]]:
    """Paid vs overdue slices for the collection pie chart."""
    overdue = max(stats.active_rentals - stats.paid_count, 0)
    return [
        {"name": PAID_LABEL, "value": stats.paid_count},
        {"name": OVERDUE_LABEL, "value": overdue},
    ]
