# expense_tracker/crud/category.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import or_
from expense_tracker.core.database import utcnow
from expense_tracker.models.category import Category
from typing import Any, Dict, List, Optional
import uuid


def _visible_to(user_id: uuid.UUID):
    """System defaults plus the user's own, tombstones excluded"""
    return (
        or_(Category.user_id.is_(None), Category.user_id == user_id),
        Category.deleted_at.is_(None),
    )

async def get_categories_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    category_type: Optional[str] = None,
) -> List[Category]:
    query = select(Category).where(*_visible_to(user_id))
    if category_type is not None:
        query = query.where(Category.type == category_type)
    result = await db.execute(query.order_by(Category.type, Category.name))
    return result.scalars().all()

async def get_visible_category(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Category]:
    result = await db.execute(
        select(Category).where(Category.id == category_id, *_visible_to(user_id))
    )
    return result.scalar_one_or_none()

async def get_owned_category(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Category]:
    """Only categories the user owns; system defaults never match"""
    result = await db.execute(
        select(Category).where(
            Category.id == category_id,
            Category.user_id == user_id,
            Category.deleted_at.is_(None),
        )
    )
    return result.scalar_one_or_none()

async def create_category(values: Dict[str, Any], db: AsyncSession, user_id: Optional[uuid.UUID] = None) -> Category:
    new_cat = Category(**values, user_id=user_id)
    db.add(new_cat)
    await db.commit()
    await db.refresh(new_cat)
    return new_cat

async def update_category(category: Category, values: Dict[str, Any], db: AsyncSession) -> Category:
    for field, value in values.items():
        setattr(category, field, value)
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category

async def soft_delete_category(category: Category, db: AsyncSession) -> None:
    category.deleted_at = utcnow()
    db.add(category)
    await db.commit()


# System-default categories shared by every user
SYSTEM_CATEGORIES: List[dict] = [
    {"name": "Food & Dining", "type": "expense", "icon": "🍔"},
    {"name": "Transportation", "type": "expense", "icon": "🚗"},
    {"name": "Shopping", "type": "expense", "icon": "🛍️"},
    {"name": "Entertainment", "type": "expense", "icon": "🎬"},
    {"name": "Bills & Utilities", "type": "expense", "icon": "💡"},
    {"name": "Healthcare", "type": "expense", "icon": "🏥"},
    {"name": "Education", "type": "expense", "icon": "📚"},
    {"name": "Salary", "type": "income", "icon": "💰"},
    {"name": "Freelance", "type": "income", "icon": "💼"},
    {"name": "Investment", "type": "income", "icon": "📈"},
    {"name": "Gift", "type": "income", "icon": "🎁"},
    {"name": "Other Income", "type": "income", "icon": "💵"},
    {"name": "Other Expense", "type": "expense", "icon": "📦"},
]

async def seed_system_categories(db: AsyncSession) -> List[Category]:
    """Ensure the system-default categories exist; create missing ones.

    Returns the list of categories that were created (empty if none were needed).
    """
    result = await db.execute(
        select(Category.name).where(Category.user_id.is_(None), Category.deleted_at.is_(None))
    )
    existing_names = {row[0] for row in result.all()}

    categories_to_create: List[Category] = [
        Category(user_id=None, **cat)
        for cat in SYSTEM_CATEGORIES
        if cat["name"] not in existing_names
    ]

    if categories_to_create:
        db.add_all(categories_to_create)
        await db.commit()
        for c in categories_to_create:
            await db.refresh(c)

    return categories_to_create
