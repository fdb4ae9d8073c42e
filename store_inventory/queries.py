"""
Building blocks for the joined inventory view.

An inventory row is only visible when its store and product are both
live, so every read of the view goes through ``join_inventory`` which
inner-joins both parents with their own ``deleted_at IS NULL`` in the
ON clause.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import and_, func

from .models import DEFAULT_LOW_STOCK_THRESHOLD, Inventory, Product, Store, to_iso

INVENTORY_PAGE_LIMIT = 25


class InventorySort(str, Enum):
    NAME = "name"
    STORE = "store"
    CATEGORY = "category"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    STOCK_ASC = "stock-asc"
    STOCK_DESC = "stock-desc"


def join_inventory(statement, criteria: Sequence[Any] = (), product_criteria: Sequence[Any] = ()):
    """Join ``statement`` (rooted at Inventory) to its live store and product and apply the filters."""
    return (
        statement.join(Store, and_(Store.id == Inventory.store_id, Store.deleted_at.is_(None)))
        .join(
            Product,
            and_(Product.id == Inventory.product_id, Product.deleted_at.is_(None), *product_criteria),
        )
        .where(Inventory.deleted_at.is_(None), *criteria)
    )


def low_stock_condition():
    return Inventory.quantity < func.coalesce(Inventory.low_stock_threshold, DEFAULT_LOW_STOCK_THRESHOLD)


def inventory_order(sort: Optional[InventorySort] = None) -> List[Any]:
    if sort is None:
        columns = [Store.name, Product.name]
    elif sort == InventorySort.NAME:
        columns = [Product.name, Store.name]
    elif sort == InventorySort.STORE:
        columns = [Store.name, Product.name]
    elif sort == InventorySort.CATEGORY:
        columns = [Product.category, Product.name]
    elif sort == InventorySort.PRICE_ASC:
        columns = [Product.price.asc(), Product.name]
    elif sort == InventorySort.PRICE_DESC:
        columns = [Product.price.desc(), Product.name]
    elif sort == InventorySort.STOCK_ASC:
        columns = [Inventory.quantity.asc(), Product.name]
    else:
        columns = [Inventory.quantity.desc(), Product.name]
    return columns + [Inventory.id]


def project_inventory_row(inventory: Inventory, store: Store, product: Product) -> Dict[str, Any]:
    return {
        "_id": str(inventory.id),
        "storeId": str(store.id),
        "storeName": store.name,
        "storeSlug": store.slug,
        "productId": str(product.id),
        "quantity": inventory.quantity,
        "lowStockThreshold": inventory.threshold,
        "createdAt": to_iso(inventory.created_at),
        "updatedAt": to_iso(inventory.updated_at),
        "product": {
            "_id": str(product.id),
            "sku": product.sku,
            "name": product.name,
            "category": product.category,
            "price": product.price,
            "createdAt": to_iso(product.created_at),
            "updatedAt": to_iso(product.updated_at),
        },
    }
