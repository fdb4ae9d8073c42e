import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..queries import INVENTORY_PAGE_LIMIT, InventorySort


class InventoryUpdate(BaseModel):
    """Partial quantity/threshold update; at least one of the two is required."""

    model_config = ConfigDict(populate_by_name=True)

    quantity: Optional[int] = Field(None, ge=0)
    low_stock_threshold: Optional[int] = Field(None, ge=0, alias="lowStockThreshold")

    @model_validator(mode="after")
    def require_one_field(self):
        if self.quantity is None and self.low_stock_threshold is None:
            raise ValueError("At least one field (quantity or lowStockThreshold) is required")
        return self

    def changes(self):
        return self.model_dump(exclude_none=True)


class InventoryCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    store_id: uuid.UUID = Field(..., alias="storeId")
    product_id: uuid.UUID = Field(..., alias="productId")
    quantity: int = Field(0, ge=0)
    low_stock_threshold: Optional[int] = Field(None, ge=0, alias="lowStockThreshold")


class InventoryQuery(BaseModel):
    """Filters for the joined inventory listing, already parsed from the query string."""

    store_id: Optional[uuid.UUID] = None
    search: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    low_stock_only: bool = False
    sort: Optional[InventorySort] = None
    page: int = 1
    limit: int = INVENTORY_PAGE_LIMIT

    @model_validator(mode="after")
    def clamp_paging(self):
        self.page = max(1, self.page)
        self.limit = min(max(1, self.limit), INVENTORY_PAGE_LIMIT)
        if self.search is not None:
            self.search = self.search.strip() or None
        if self.category is not None:
            self.category = self.category.strip() or None
        return self

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
