"""Monthly report and dashboard aggregation."""

from datetime import datetime

import pytest

from conftest import make_category, make_transaction
from expense_tracker.core.database import utcnow
from expense_tracker.core.exceptions import ValidationError
from expense_tracker.services.reports import ReportService, month_window, percentage_of
from expense_tracker.services.transactions import TransactionService


class TestHelpers:

    def test_percentage_of_zero_total_is_zero(self):
        assert percentage_of(25, 0) == 0.0

    def test_percentage_is_rounded(self):
        assert percentage_of(40, 140) == 28.57

    def test_month_window_spans_one_calendar_month(self):
        assert month_window(2024, 2) == (datetime(2024, 2, 1), datetime(2024, 3, 1))
        assert month_window(2023, 12) == (datetime(2023, 12, 1), datetime(2024, 1, 1))

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_month_window_rejects_invalid_month(self, month):
        with pytest.raises(ValidationError):
            month_window(2024, month)


class TestMonthlyReport:

    async def test_income_and_expense_example(self, db, alice):
        salary = await make_category(db, None, "Salary", "income")
        food = await make_category(db, alice, "Food", "expense")
        await make_transaction(db, alice, salary, 100, "income", datetime(2024, 1, 5))
        await make_transaction(db, alice, food, 40, "expense", datetime(2024, 1, 10))

        result = await ReportService(db).monthly_report(alice.id, year=2024, month=1)

        assert result.report.month == "January 2024"
        assert result.report.total_income == 100
        assert result.report.total_expense == 40
        assert result.report.balance == 60
        assert result.report.transaction_count == 2
        food_entry = next(e for e in result.category_breakdown if e.category_name == "Food")
        assert food_entry.total_amount == 40
        assert food_entry.count == 1
        assert food_entry.percentage == pytest.approx(28.57)

    async def test_breakdown_sorted_by_total_descending(self, db, alice):
        salary = await make_category(db, None, "Salary", "income")
        food = await make_category(db, alice, "Food")
        rent = await make_category(db, alice, "Rent")
        await make_transaction(db, alice, salary, 100, "income", datetime(2024, 1, 5))
        await make_transaction(db, alice, food, 40, "expense", datetime(2024, 1, 10))
        await make_transaction(db, alice, food, 30, "expense", datetime(2024, 1, 12))
        await make_transaction(db, alice, rent, 60, "expense", datetime(2024, 1, 1))

        result = await ReportService(db).monthly_report(alice.id, year=2024, month=1)

        assert [(e.category_name, e.total_amount, e.count) for e in result.category_breakdown] == [
            ("Salary", 100, 1),
            ("Food", 70, 2),
            ("Rent", 60, 1),
        ]
        assert [e.percentage for e in result.category_breakdown] == [43.48, 30.43, 26.09]

    async def test_empty_month_is_all_zeros(self, db, alice):
        result = await ReportService(db).monthly_report(alice.id, year=2024, month=6)

        assert result.report.total_income == 0
        assert result.report.total_expense == 0
        assert result.report.balance == 0
        assert result.report.transaction_count == 0
        assert result.category_breakdown == []

    async def test_window_bounds(self, db, alice):
        food = await make_category(db, alice, "Food")
        await make_transaction(db, alice, food, 1, "expense", datetime(2023, 12, 31, 23, 59, 59))
        await make_transaction(db, alice, food, 2, "expense", datetime(2024, 1, 1, 0, 0, 0))
        await make_transaction(db, alice, food, 4, "expense", datetime(2024, 1, 31, 23, 59, 59))
        await make_transaction(db, alice, food, 8, "expense", datetime(2024, 2, 1, 0, 0, 0))

        result = await ReportService(db).monthly_report(alice.id, year=2024, month=1)

        assert result.report.total_expense == 6
        assert result.report.transaction_count == 2

    async def test_ignores_deleted_and_other_users(self, db, alice, bob):
        food = await make_category(db, None, "Food")
        await make_transaction(db, alice, food, 10, "expense", datetime(2024, 1, 2))
        removed = await make_transaction(db, alice, food, 500, "expense", datetime(2024, 1, 3))
        await make_transaction(db, bob, food, 900, "expense", datetime(2024, 1, 4))
        await TransactionService(db).delete(alice.id, removed.id)

        result = await ReportService(db).monthly_report(alice.id, year=2024, month=1)

        assert result.report.total_expense == 10
        assert result.report.transaction_count == 1
        assert result.category_breakdown[0].total_amount == 10
        assert result.category_breakdown[0].percentage == 100

    async def test_defaults_to_current_month(self, db, alice):
        food = await make_category(db, alice, "Food")
        now = utcnow()
        await make_transaction(db, alice, food, 12, "expense", datetime(now.year, now.month, 1, 12))

        result = await ReportService(db).monthly_report(alice.id)

        assert result.report.month == now.strftime("%B %Y")
        assert result.report.total_expense == 12

    async def test_invalid_month_is_rejected(self, db, alice):
        with pytest.raises(ValidationError):
            await ReportService(db).monthly_report(alice.id, year=2024, month=13)


class TestDashboardStats:

    async def test_all_time_totals(self, db, alice):
        salary = await make_category(db, None, "Salary", "income")
        food = await make_category(db, alice, "Food")
        await make_transaction(db, alice, salary, 1000, "income", datetime(2022, 5, 1))
        await make_transaction(db, alice, food, 250, "expense", datetime(2024, 8, 9))

        stats = await ReportService(db).dashboard_stats(alice.id)

        assert stats.total_income == 1000
        assert stats.total_expense == 250
        assert stats.balance == 750
        assert stats.transaction_count == 2
        assert [e.percentage for e in stats.category_breakdown] == [80.0, 20.0]

    async def test_recent_transactions_are_the_latest_five(self, db, alice):
        food = await make_category(db, alice, "Food")
        created = []
        for day in range(1, 8):
            created.append(await make_transaction(db, alice, food, day, "expense", datetime(2024, 3, day)))

        stats = await ReportService(db).dashboard_stats(alice.id)

        assert [tx.id for tx in stats.recent_transactions] == [tx.id for tx in reversed(created[2:])]
        assert stats.recent_transactions[0].category.name == "Food"

    async def test_breakdown_limited_to_ten_categories(self, db, alice):
        for i in range(12):
            category = await make_category(db, alice, f"Category {i:02d}")
            await make_transaction(db, alice, category, i + 1, "expense", datetime(2024, 1, 1))

        stats = await ReportService(db).dashboard_stats(alice.id)

        assert len(stats.category_breakdown) == 10
        assert stats.category_breakdown[0].total_amount == 12
        assert stats.category_breakdown[-1].total_amount == 3

    async def test_empty_dashboard(self, db, alice):
        stats = await ReportService(db).dashboard_stats(alice.id)

        assert stats.total_income == 0
        assert stats.balance == 0
        assert stats.transaction_count == 0
        assert stats.category_breakdown == []
        assert stats.recent_transactions == []


class TestReportRoutes:

    async def test_monthly_report_endpoint(self, client, alice_headers):
        response = await client.post(
            "/api/v1/categories", json={"name": "Food", "type": "expense"}, headers=alice_headers
        )
        category_id = response.json()["id"]
        await client.post(
            "/api/v1/transactions",
            json={
                "amount": 40,
                "description": "Groceries",
                "date": "2024-01-10T09:00:00Z",
                "type": "expense",
                "category_id": category_id,
            },
            headers=alice_headers,
        )

        response = await client.get(
            "/api/v1/reports/monthly", params={"year": 2024, "month": 1}, headers=alice_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["report"]["total_expense"] == 40
        assert body["report"]["balance"] == -40
        assert body["category_breakdown"][0]["percentage"] == 100

    async def test_monthly_report_rejects_bad_month(self, client, alice_headers):
        response = await client.get(
            "/api/v1/reports/monthly", params={"year": 2024, "month": 13}, headers=alice_headers
        )

        assert response.status_code == 400

    async def test_dashboard_endpoint(self, client, alice_headers):
        response = await client.get("/api/v1/dashboard", headers=alice_headers)

        assert response.status_code == 200
        assert response.json() == {
            "total_income": 0.0,
            "total_expense": 0.0,
            "balance": 0.0,
            "transaction_count": 0,
            "category_breakdown": [],
            "recent_transactions": [],
        }

    async def test_reports_require_authentication(self, client):
        assert (await client.get("/api/v1/dashboard")).status_code == 401
        assert (await client.get("/api/v1/reports/monthly")).status_code == 401
