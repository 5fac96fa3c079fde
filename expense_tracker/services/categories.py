# expense_tracker/services/categories.py
"""
Category management with ownership rules.

System-default categories (no owner) are readable by everyone and writable by
nobody. A category owned by someone else is reported as missing, never as
forbidden.
"""
import logging
import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.exceptions import ConflictError, NotFoundError
from expense_tracker.crud import category as category_crud
from expense_tracker.crud.transaction import count_transactions_for_category
from expense_tracker.models.category import Category, DEFAULT_ICON
from expense_tracker.models.transaction import TransactionType
from expense_tracker.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, user_id: uuid.UUID, category_type: Optional[TransactionType] = None) -> List[Category]:
        return await category_crud.get_categories_for_user(
            user_id,
            self.db,
            category_type=category_type.value if category_type else None,
        )

    async def get(self, user_id: uuid.UUID, category_id: uuid.UUID) -> Category:
        category = await category_crud.get_visible_category(category_id, user_id, self.db)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    async def create(self, user_id: uuid.UUID, cat_in: CategoryCreate) -> Category:
        category = await category_crud.create_category(
            {
                "name": cat_in.name,
                "type": cat_in.type.value,
                "icon": cat_in.icon or DEFAULT_ICON,
            },
            self.db,
            user_id=user_id,
        )
        logger.info(f"Category {category.id} created for user {user_id}")
        return category

    async def update(self, user_id: uuid.UUID, category_id: uuid.UUID, cat_in: CategoryUpdate) -> Category:
        category = await self._get_owned(user_id, category_id, "Category not found or cannot be updated")

        values = {"name": cat_in.name, "type": cat_in.type.value}
        if cat_in.icon:
            values["icon"] = cat_in.icon
        category = await category_crud.update_category(category, values, self.db)
        logger.info(f"Category {category.id} updated by user {user_id}")
        return category

    async def delete(self, user_id: uuid.UUID, category_id: uuid.UUID) -> None:
        category = await self._get_owned(user_id, category_id, "Category not found or cannot be deleted")

        in_use = await count_transactions_for_category(category.id, self.db)
        if in_use > 0:
            logger.warning(f"Refusing to delete category {category.id}: {in_use} transaction(s) reference it")
            raise ConflictError(
                "Cannot delete category that is being used in transactions",
                hint="Please reassign or delete the transactions first",
            )

        await category_crud.soft_delete_category(category, self.db)
        logger.info(f"Category {category.id} deleted by user {user_id}")

    async def _get_owned(self, user_id: uuid.UUID, category_id: uuid.UUID, message: str) -> Category:
        category = await category_crud.get_owned_category(category_id, user_id, self.db)
        if category is None:
            raise NotFoundError(message)
        return category
