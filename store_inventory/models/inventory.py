import uuid
from typing import Any, Dict, Optional

from sqlalchemy import CheckConstraint, Index, UniqueConstraint
from sqlmodel import Field

from .base import SoftDeleteMixin, TimestampMixin, to_iso

DEFAULT_LOW_STOCK_THRESHOLD = 10


class Inventory(TimestampMixin, SoftDeleteMixin, table=True):
    # The (store, product) pair stays unique even across soft-deleted rows;
    # re-adding a removed product reactivates the existing row.
    __table_args__ = (
        UniqueConstraint("store_id", "product_id", name="uq_inventory_store_product"),
        CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
        CheckConstraint("low_stock_threshold >= 0", name="ck_inventory_threshold_non_negative"),
        Index("ix_inventory_store_deleted", "store_id", "deleted_at"),
        Index("ix_inventory_product_deleted", "product_id", "deleted_at"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    store_id: uuid.UUID = Field(foreign_key="store.id", index=True)
    product_id: uuid.UUID = Field(foreign_key="product.id", index=True)
    quantity: int = Field(default=0, ge=0)
    low_stock_threshold: Optional[int] = Field(default=DEFAULT_LOW_STOCK_THRESHOLD, ge=0)

    @property
    def threshold(self) -> int:
        if self.low_stock_threshold is None:
            return DEFAULT_LOW_STOCK_THRESHOLD
        return self.low_stock_threshold

    @property
    def is_low_stock(self) -> bool:
        return self.quantity < self.threshold

    def to_json(self) -> Dict[str, Any]:
        return {
            "_id": str(self.id),
            "storeId": str(self.store_id),
            "productId": str(self.product_id),
            "quantity": self.quantity,
            "lowStockThreshold": self.threshold,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
            "deletedAt": to_iso(self.deleted_at),
        }
