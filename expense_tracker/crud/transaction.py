# expense_tracker/crud/transaction.py
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc, func
from expense_tracker.core.database import utcnow
from expense_tracker.models.category import Category
from expense_tracker.models.transaction import Transaction
from expense_tracker.schemas.transaction import TransactionFilter
from typing import Any, Dict, List, Optional, Sequence, Tuple
import uuid

# Newest first; same-day entries fall back to insertion order
NEWEST_FIRST = (desc(Transaction.date), desc(Transaction.created_at))


def _owned_by(user_id: uuid.UUID) -> list:
    return [Transaction.user_id == user_id, Transaction.deleted_at.is_(None)]

def _in_window(start: Optional[datetime], end: Optional[datetime]) -> list:
    """Half-open window [start, end)"""
    conditions = []
    if start is not None:
        conditions.append(Transaction.date >= start)
    if end is not None:
        conditions.append(Transaction.date < end)
    return conditions

async def get_transactions_page(
    user_id: uuid.UUID,
    filters: TransactionFilter,
    db: AsyncSession,
) -> Tuple[List[Transaction], int]:
    conditions = _owned_by(user_id)
    if filters.start_date is not None:
        conditions.append(Transaction.date >= filters.start_date)
    if filters.end_date is not None:
        conditions.append(Transaction.date <= filters.end_date)
    if filters.type is not None:
        conditions.append(Transaction.type == filters.type.value)
    if filters.category_id is not None:
        conditions.append(Transaction.category_id == filters.category_id)

    total = await db.scalar(select(func.count()).select_from(Transaction).where(*conditions)) or 0

    offset = (filters.page - 1) * filters.limit
    if offset >= total:
        # Past the last page; offsets this large may not fit the driver's integer type
        return [], total

    result = await db.execute(
        select(Transaction)
        .where(*conditions)
        .order_by(*NEWEST_FIRST)
        .limit(filters.limit)
        .offset(offset)
    )
    return result.scalars().all(), total

async def get_recent_transactions(db: AsyncSession, user_id: uuid.UUID, limit: int = 5) -> List[Transaction]:
    """Get the most recent transactions for a user with optional limit"""
    result = await db.execute(
        select(Transaction)
        .where(*_owned_by(user_id))
        .order_by(*NEWEST_FIRST)
        .limit(limit)
    )
    return result.scalars().all()

async def get_transaction_by_id(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, *_owned_by(user_id))
    )
    return result.scalar_one_or_none()

async def create_transaction_for_user(
    user_id: uuid.UUID,
    values: Dict[str, Any],
    category: Category,
    db: AsyncSession,
) -> Transaction:
    new_tx = Transaction(**values, category=category, user_id=user_id)
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)
    return new_tx

async def update_transaction(
    tx: Transaction,
    values: Dict[str, Any],
    category: Category,
    db: AsyncSession,
) -> Transaction:
    for field, value in values.items():
        setattr(tx, field, value)
    tx.category = category
    db.add(tx)
    await db.commit()
    await db.refresh(tx)
    return tx

async def soft_delete_transaction(tx: Transaction, db: AsyncSession) -> None:
    tx.deleted_at = utcnow()
    db.add(tx)
    await db.commit()

async def count_transactions_for_category(category_id: uuid.UUID, db: AsyncSession) -> int:
    """Live transactions of any user that reference the category"""
    count = await db.scalar(
        select(func.count())
        .select_from(Transaction)
        .where(Transaction.category_id == category_id, Transaction.deleted_at.is_(None))
    )
    return count or 0


# ────────────────────────────────────────────────────────────────────────────────
# AGGREGATES
# ────────────────────────────────────────────────────────────────────────────────
async def sum_amount(
    db: AsyncSession,
    user_id: uuid.UUID,
    tx_type: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> float:
    total = await db.scalar(
        select(func.coalesce(func.sum(Transaction.amount), 0.0))
        .where(*_owned_by(user_id), Transaction.type == tx_type, *_in_window(start, end))
    )
    return float(total or 0.0)

async def count_transactions(
    db: AsyncSession,
    user_id: uuid.UUID,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> int:
    count = await db.scalar(
        select(func.count())
        .select_from(Transaction)
        .where(*_owned_by(user_id), *_in_window(start, end))
    )
    return count or 0

async def get_category_totals(
    db: AsyncSession,
    user_id: uuid.UUID,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    limit: Optional[int] = None,
) -> Sequence[Any]:
    """Group the user's transactions by category: (category_id, category_name, category_icon, total_amount, tx_count)"""
    total_amount = func.sum(Transaction.amount).label("total_amount")
    query = (
        select(
            Transaction.category_id.label("category_id"),
            Category.name.label("category_name"),
            Category.icon.label("category_icon"),
            total_amount,
            func.count(Transaction.id).label("tx_count"),
        )
        .join(Category, Category.id == Transaction.category_id)
        .where(*_owned_by(user_id), *_in_window(start, end))
        .group_by(Transaction.category_id, Category.name, Category.icon)
        .order_by(desc(total_amount), Category.name)
    )
    if limit is not None:
        query = query.limit(limit)

    result = await db.execute(query)
    return result.all()
