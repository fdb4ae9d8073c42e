import uuid
from typing import Any, Dict

from sqlalchemy import CheckConstraint
from sqlmodel import Field

from .base import SoftDeleteMixin, TimestampMixin, to_iso


def normalize_sku(value: str) -> str:
    return value.strip().upper()


class Product(TimestampMixin, SoftDeleteMixin, table=True):
    __table_args__ = (CheckConstraint("price >= 0", name="ck_product_price_non_negative"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    # Unique across every row, deleted or not
    sku: str = Field(max_length=32, unique=True, index=True)
    name: str = Field(max_length=200, index=True)
    category: str = Field(max_length=50, index=True)
    price: float = Field(ge=0)

    def to_json(self) -> Dict[str, Any]:
        return {
            "_id": str(self.id),
            "sku": self.sku,
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
            "deletedAt": to_iso(self.deleted_at),
        }
