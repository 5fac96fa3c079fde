# expense_tracker/schemas/report.py
from typing import List
from pydantic import BaseModel
import uuid

from expense_tracker.schemas.transaction import TransactionResponse

class CategorySummary(BaseModel):
    category_id: uuid.UUID
    category_name: str
    category_icon: str
    total_amount: float
    count: int
    percentage: float

class MonthlyTotals(BaseModel):
    month: str
    total_income: float
    total_expense: float
    balance: float
    transaction_count: int

class MonthlyReport(BaseModel):
    report: MonthlyTotals
    category_breakdown: List[CategorySummary]

class DashboardStats(BaseModel):
    total_income: float
    total_expense: float
    balance: float
    transaction_count: int
    category_breakdown: List[CategorySummary]
    recent_transactions: List[TransactionResponse]
