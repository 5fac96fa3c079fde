# expense_tracker/models/transaction.py
import uuid
from enum import Enum
from sqlalchemy import Column, String, ForeignKey, Float, DateTime, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from expense_tracker.core.database import Base, utcnow

class TransactionType(str, Enum):
    income = "income"
    expense = "expense"

class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        CheckConstraint("type IN ('income', 'expense')", name="ck_transactions_type"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id"), nullable=False, index=True)
    # Always positive; the direction lives in ``type``
    amount = Column(Float, nullable=False)
    description = Column(String(length=255), nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    type = Column(String(length=10), nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime, nullable=True, index=True)

    category = relationship("Category", lazy="joined")

    def __repr__(self):
        return f"<Transaction amount={self.amount} type={self.type} date={self.date} user_id={self.user_id}>"
