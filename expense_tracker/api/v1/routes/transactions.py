# expense_tracker/api/v1/routes/transactions.py
from datetime import datetime
from fastapi import APIRouter, Depends, Query, status
from typing import Optional
import uuid

from expense_tracker.schemas.transaction import (
    DEFAULT_PAGE_SIZE,
    TransactionCreate,
    TransactionFilter,
    TransactionPage,
    TransactionResponse,
    TransactionUpdate,
)
from expense_tracker.models.transaction import TransactionType
from expense_tracker.services.transactions import TransactionService
from expense_tracker.core.auth import User
from expense_tracker.api.deps import get_current_user, get_transaction_service

router = APIRouter(prefix="/transactions", tags=["transactions"])

@router.get("", response_model=TransactionPage)
async def read_transactions(
    start_date: Optional[datetime] = Query(None, description="Inclusive lower bound on the transaction date"),
    end_date: Optional[datetime] = Query(None, description="Inclusive upper bound on the transaction date"),
    type: Optional[TransactionType] = Query(None),
    category_id: Optional[uuid.UUID] = Query(None),
    page: int = Query(1, description="Values below 1 are treated as 1"),
    limit: int = Query(DEFAULT_PAGE_SIZE, description="Values outside 1-100 fall back to 10"),
    service: TransactionService = Depends(get_transaction_service),
    user: User = Depends(get_current_user),
):
    filters = TransactionFilter(
        start_date=start_date,
        end_date=end_date,
        type=type,
        category_id=category_id,
        page=page,
        limit=limit,
    )
    return await service.list(user.id, filters)

@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    tx_in: TransactionCreate,
    service: TransactionService = Depends(get_transaction_service),
    user: User = Depends(get_current_user),
):
    return await service.create(user.id, tx_in)

@router.get("/{transaction_id}", response_model=TransactionResponse)
async def read_transaction(
    transaction_id: uuid.UUID,
    service: TransactionService = Depends(get_transaction_service),
    user: User = Depends(get_current_user),
):
    return await service.get(user.id, transaction_id)

@router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction_endpoint(
    transaction_id: uuid.UUID,
    tx_in: TransactionUpdate,
    service: TransactionService = Depends(get_transaction_service),
    user: User = Depends(get_current_user),
):
    return await service.update(user.id, transaction_id, tx_in)

@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction_endpoint(
    transaction_id: uuid.UUID,
    service: TransactionService = Depends(get_transaction_service),
    user: User = Depends(get_current_user),
):
    await service.delete(user.id, transaction_id)
    return None
