# expense_tracker/schemas/transaction.py
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime, timezone
import uuid

from expense_tracker.models.transaction import TransactionType
from expense_tracker.schemas.category import CategoryResponse

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are stored as naive UTC"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class TransactionBase(BaseModel):
    amount: float = Field(..., gt=0, allow_inf_nan=False, description="Always positive; the sign is given by type")
    description: str = Field(..., min_length=1, max_length=255, description="E.g. Grocery at Costco")
    date: datetime = Field(..., description="ISO 8601 date/time of transaction")
    type: TransactionType
    category_id: uuid.UUID

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

class TransactionCreate(TransactionBase):
    pass

class TransactionUpdate(TransactionBase):
    """Every field is overwritten on update"""
    pass

class TransactionResponse(BaseModel):
    id: uuid.UUID
    amount: float
    description: str
    date: datetime
    type: TransactionType
    category: CategoryResponse
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class TransactionFilter(BaseModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    type: Optional[TransactionType] = None
    category_id: Optional[uuid.UUID] = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

    @field_validator("page")
    @classmethod
    def clamp_page(cls, value: int) -> int:
        return value if value >= 1 else 1

    @field_validator("limit")
    @classmethod
    def clamp_limit(cls, value: int) -> int:
        # Out-of-range sizes fall back to the default rather than the nearest bound
        if value < 1 or value > MAX_PAGE_SIZE:
            return DEFAULT_PAGE_SIZE
        return value

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int

class TransactionPage(BaseModel):
    data: List[TransactionResponse]
    pagination: Pagination
