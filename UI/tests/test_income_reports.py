import unittest
from datetime import date

from reports.income import (
    DashboardStats,
    dashboard_stats,
    month_label,
    monthly_income,
    normalize_amount,
    payment_status,
)

TODAY = date(2026, 3, 15)

LEASES = [
    {"id": 1, "activo": True},
    {"id": 2, "activo": True},
    {"id": 3, "activo": False},
]


def payment(lease_id, when, amount, rent=True):
    return {"alquilerId": lease_id, "fechaPago": when, "montoMensual": amount, "pagoRenta": rent}


class TestNormalizeAmount(unittest.TestCase):

    def test_numbers_pass_through(self):
        self.assertEqual(normalize_amount(1200), 1200.0)
        self.assertEqual(normalize_amount(99.5), 99.5)

    def test_strings_are_cleaned(self):
        self.assertEqual(normalize_amount("$1,200.50"), 1200.5)
        self.assertEqual(normalize_amount("abc"), 0.0)

    def test_other_values_are_zero(self):
        self.assertEqual(normalize_amount(None), 0.0)
        self.assertEqual(normalize_amount(float("nan")), 0.0)
        self.assertEqual(normalize_amount(True), 0.0)


class TestDashboardStats(unittest.TestCase):

    def test_month_label(self):
        self.assertEqual(month_label(date(2026, 1, 31)), "Jan. 2026")

    def test_collected_and_overdue(self):
        payments = [
            payment(1, "2026-03-02", 800),
            payment(1, "2026-03-10T12:00:00", "200"),
            payment(2, "2026-02-27", 900),
            payment(2, "2026-03-05", 50, rent=False),
        ]
        stats = dashboard_stats(LEASES, payments, TODAY)
        self.assertEqual(stats.active_rentals, 2)
        self.assertEqual(stats.collected_payments, 1000.0)
        self.assertEqual(stats.overdue_payments, 1)
        self.assertEqual(stats.paid_count, 1)

    def test_no_payments(self):
        stats = dashboard_stats(LEASES, [], TODAY)
        self.assertEqual(stats.collected_payments, 0.0)
        self.assertEqual(stats.overdue_payments, 2)

    def test_payment_status_slices(self):
        status = payment_status(DashboardStats(active_rentals=3, paid_count=1))
        self.assertEqual(status, [{"name": "Paid", "value": 1}, {"name": "Overdue", "value": 2}])

    def test_payment_status_never_negative(self):
        status = payment_status(DashboardStats(active_rentals=0, paid_count=2))
        self.assertEqual(status[1]["value"], 0)


class TestMonthlyIncome(unittest.TestCase):

    def test_trailing_twelve_months_oldest_first(self):
        rows = monthly_income([], TODAY)
        self.assertEqual(len(rows), 12)
        self.assertEqual(rows[0]["month"], "Apr. 2025")
        self.assertEqual(rows[-1]["month"], "Mar. 2026")
        self.assertTrue(all(row["income"] == 0 for row in rows))

    def test_income_in_thousands(self):
        payments = [
            payment(1, "2026-03-02", 1200),
            payment(2, "2026-03-03", 1300),
            payment(1, "2026-01-02", 1499),
            payment(1, "2024-01-02", 5000),
            payment(1, "not a date", 5000),
            payment(1, "2026-02-02", 9000, rent=False),
        ]
        rows = {row["month"]: row["income"] for row in monthly_income(payments, TODAY)}
        self.assertEqual(rows["Mar. 2026"], 3)
        self.assertEqual(rows["Jan. 2026"], 1)
        self.assertEqual(rows["Feb. 2026"], 0)
        self.assertNotIn("Jan. 2024", rows)


if __name__ == '__main__':
    unittest.main()
