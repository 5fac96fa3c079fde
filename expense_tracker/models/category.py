# expense_tracker/models/category.py
import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime, CheckConstraint, Uuid
from expense_tracker.core.database import Base, utcnow

DEFAULT_ICON = "📦"

class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (
        CheckConstraint("type IN ('income', 'expense')", name="ck_categories_type"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # NULL owner means a system-default category shared by every user
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True, index=True)
    name = Column(String(length=50), nullable=False)
    type = Column(String(length=10), nullable=False)
    icon = Column(String(length=32), nullable=False, default=DEFAULT_ICON)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime, nullable=True, index=True)

    @property
    def is_system(self) -> bool:
        return self.user_id is None

    def __repr__(self):
        return f"<Category name={self.name} type={self.type} user_id={self.user_id}>"
