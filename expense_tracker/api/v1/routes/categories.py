# expense_tracker/api/v1/routes/categories.py
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
import uuid

from expense_tracker.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from expense_tracker.models.transaction import TransactionType
from expense_tracker.services.categories import CategoryService
from expense_tracker.core.auth import User
from expense_tracker.api.deps import get_current_user, get_category_service

router = APIRouter(prefix="/categories", tags=["categories"])

@router.get("", response_model=List[CategoryResponse])
async def read_categories(
    type: Optional[TransactionType] = Query(None, description="Only income or only expense categories"),
    service: CategoryService = Depends(get_category_service),
    user: User = Depends(get_current_user),
):
    return await service.list(user.id, type)

@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    cat_in: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
    user: User = Depends(get_current_user),
):
    return await service.create(user.id, cat_in)

@router.get("/{category_id}", response_model=CategoryResponse)
async def read_category(
    category_id: uuid.UUID,
    service: CategoryService = Depends(get_category_service),
    user: User = Depends(get_current_user),
):
    return await service.get(user.id, category_id)

@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category_endpoint(
    category_id: uuid.UUID,
    cat_in: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
    user: User = Depends(get_current_user),
):
    return await service.update(user.id, category_id, cat_in)

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category_endpoint(
    category_id: uuid.UUID,
    service: CategoryService = Depends(get_category_service),
    user: User = Depends(get_current_user),
):
    await service.delete(user.id, category_id)
    return None
