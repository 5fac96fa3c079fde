# expense_tracker/api/v1/routes/reports.py
from fastapi import APIRouter, Depends, Query
from typing import Optional

from expense_tracker.schemas.report import DashboardStats, MonthlyReport
from expense_tracker.services.reports import ReportService
from expense_tracker.core.auth import User
from expense_tracker.api.deps import get_current_user, get_report_service

router = APIRouter(tags=["reports"])

@router.get("/reports/monthly", response_model=MonthlyReport)
async def get_monthly_report(
    year: Optional[int] = Query(None, description="Defaults to the current year"),
    month: Optional[int] = Query(None, description="1-12, defaults to the current month"),
    service: ReportService = Depends(get_report_service),
    user: User = Depends(get_current_user),
):
    """
    Income, expense, balance and per-category breakdown for one calendar month.
    """
    return await service.monthly_report(user.id, year=year, month=month)

@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard_stats(
    service: ReportService = Depends(get_report_service),
    user: User = Depends(get_current_user),
):
    """
    All-time totals, the top categories by amount and the five latest transactions.
    """
    return await service.dashboard_stats(user.id)
