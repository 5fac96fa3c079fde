# expense_tracker/api/deps.py
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.database import get_async_session
from expense_tracker.core.auth import User, UserManager, authenticate_token, get_user_manager
from expense_tracker.services.categories import CategoryService
from expense_tracker.services.reports import ReportService
from expense_tracker.services.transactions import TransactionService

# Missing credentials are reported by authenticate_token as a 401, not by the scheme as a 403
optional_security = HTTPBearer(auto_error=False)

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    user_manager: UserManager = Depends(get_user_manager),
) -> User:
    """Resolve the bearer token to an active user"""
    token = credentials.credentials if credentials else None
    return await authenticate_token(user_manager, token)

def get_category_service(db: AsyncSession = Depends(get_async_session)) -> CategoryService:
    return CategoryService(db)

def get_transaction_service(db: AsyncSession = Depends(get_async_session)) -> TransactionService:
    return TransactionService(db)

def get_report_service(db: AsyncSession = Depends(get_async_session)) -> ReportService:
    return ReportService(db)
