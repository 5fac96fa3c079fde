# expense_tracker/services/reports.py
"""
Monthly report and dashboard statistics.

Both views are computed on every call straight from the caller's live
transactions; nothing is cached or materialized. Category percentages are
taken against income + expense combined, and are 0 when that sum is 0.
"""
import uuid
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.database import utcnow
from expense_tracker.core.exceptions import ValidationError
from expense_tracker.crud import transaction as transaction_crud
from expense_tracker.models.transaction import TransactionType
from expense_tracker.schemas.report import (
    CategorySummary,
    DashboardStats,
    MonthlyReport,
    MonthlyTotals,
)
from expense_tracker.schemas.transaction import TransactionResponse

RECENT_TRANSACTIONS_LIMIT = 5
DASHBOARD_BREAKDOWN_LIMIT = 10


def percentage_of(part: float, total: float) -> float:
    if total <= 0:
        return 0.0
    return round(part / total * 100, 2)


def month_window(year: int, month: int) -> Tuple[datetime, datetime]:
    """First instant of the month and first instant of the following month"""
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1 <= year <= 9998:
        raise ValidationError("Year is out of range")

    start = datetime(year, month, 1)
    if month == 12:
        end = datetime(year + 1, 1, 1)
    else:
        end = datetime(year, month + 1, 1)
    return start, end


class ReportService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def monthly_report(
        self,
        user_id: uuid.UUID,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> MonthlyReport:
        now = utcnow()
        start, end = month_window(
            now.year if year is None else year,
            now.month if month is None else month,
        )

        income, expense, count = await self._totals(user_id, start, end)
        breakdown = await self._breakdown(user_id, income + expense, start, end)

        return MonthlyReport(
            report=MonthlyTotals(
                month=start.strftime("%B %Y"),
                total_income=income,
                total_expense=expense,
                balance=income - expense,
                transaction_count=count,
            ),
            category_breakdown=breakdown,
        )

    async def dashboard_stats(self, user_id: uuid.UUID) -> DashboardStats:
        income, expense, count = await self._totals(user_id)
        breakdown = await self._breakdown(user_id, income + expense, limit=DASHBOARD_BREAKDOWN_LIMIT)
        recent = await transaction_crud.get_recent_transactions(
            self.db, user_id, limit=RECENT_TRANSACTIONS_LIMIT
        )

        return DashboardStats(
            total_income=income,
            total_expense=expense,
            balance=income - expense,
            transaction_count=count,
            category_breakdown=breakdown,
            recent_transactions=[TransactionResponse.model_validate(tx) for tx in recent],
        )

    async def _totals(
        self,
        user_id: uuid.UUID,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Tuple[float, float, int]:
        income = await transaction_crud.sum_amount(self.db, user_id, TransactionType.income.value, start, end)
        expense = await transaction_crud.sum_amount(self.db, user_id, TransactionType.expense.value, start, end)
        count = await transaction_crud.count_transactions(self.db, user_id, start, end)
        return income, expense, count

    async def _breakdown(
        self,
        user_id: uuid.UUID,
        grand_total: float,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[CategorySummary]:
        rows = await transaction_crud.get_category_totals(self.db, user_id, start, end, limit=limit)
        return [
            CategorySummary(
                category_id=row.category_id,
                category_name=row.category_name,
                category_icon=row.category_icon,
                total_amount=float(row.total_amount),
                count=row.tx_count,
                percentage=percentage_of(float(row.total_amount), grand_total),
            )
            for row in rows
        ]
