# expense_tracker/schemas/category.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
import uuid

from expense_tracker.models.transaction import TransactionType

class CategoryBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    type: TransactionType
    icon: Optional[str] = Field(default="", max_length=32)

class CategoryCreate(CategoryBase):
    pass

class CategoryUpdate(CategoryBase):
    """Full replacement; an empty icon keeps the current one"""
    pass

class CategoryResponse(BaseModel):
    id: uuid.UUID
    name: str
    type: TransactionType
    icon: str
    user_id: Optional[uuid.UUID] = None
    is_system: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
