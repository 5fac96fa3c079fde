# expense_tracker/services/transactions.py
import logging
import math
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.exceptions import NotFoundError, ValidationError
from expense_tracker.crud import transaction as transaction_crud
from expense_tracker.crud.category import get_visible_category
from expense_tracker.models.category import Category
from expense_tracker.models.transaction import Transaction
from expense_tracker.schemas.transaction import (
    Pagination,
    TransactionBase,
    TransactionCreate,
    TransactionFilter,
    TransactionPage,
    TransactionResponse,
    TransactionUpdate,
)

logger = logging.getLogger(__name__)


class TransactionService:
    """Transactions are private to their owner; categories must be visible to that owner."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, user_id: uuid.UUID, filters: TransactionFilter) -> TransactionPage:
        transactions, total = await transaction_crud.get_transactions_page(user_id, filters, self.db)
        return TransactionPage(
            data=[TransactionResponse.model_validate(tx) for tx in transactions],
            pagination=Pagination(
                page=filters.page,
                limit=filters.limit,
                total=total,
                total_pages=math.ceil(total / filters.limit),
            ),
        )

    async def get(self, user_id: uuid.UUID, transaction_id: uuid.UUID) -> Transaction:
        tx = await transaction_crud.get_transaction_by_id(transaction_id, user_id, self.db)
        if tx is None:
            raise NotFoundError("Transaction not found")
        return tx

    async def create(self, user_id: uuid.UUID, tx_in: TransactionCreate) -> Transaction:
        category = await self._resolve_category(user_id, tx_in.category_id)
        tx = await transaction_crud.create_transaction_for_user(
            user_id, self._values(tx_in), category, self.db
        )
        logger.info(f"Transaction {tx.id} created for user {user_id}")
        return tx

    async def update(self, user_id: uuid.UUID, transaction_id: uuid.UUID, tx_in: TransactionUpdate) -> Transaction:
        tx = await self.get(user_id, transaction_id)
        category = await self._resolve_category(user_id, tx_in.category_id)
        tx = await transaction_crud.update_transaction(tx, self._values(tx_in), category, self.db)
        logger.info(f"Transaction {tx.id} updated by user {user_id}")
        return tx

    async def delete(self, user_id: uuid.UUID, transaction_id: uuid.UUID) -> None:
        tx = await self.get(user_id, transaction_id)
        await transaction_crud.soft_delete_transaction(tx, self.db)
        logger.info(f"Transaction {transaction_id} deleted by user {user_id}")

    async def _resolve_category(self, user_id: uuid.UUID, category_id: uuid.UUID) -> Category:
        # The category's own type is not compared with the transaction type
        category = await get_visible_category(category_id, user_id, self.db)
        if category is None:
            raise ValidationError("Invalid category")
        return category

    @staticmethod
    def _values(tx_in: TransactionBase) -> dict:
        values = tx_in.model_dump(exclude={"category_id"})
        values["type"] = tx_in.type.value
        return values
