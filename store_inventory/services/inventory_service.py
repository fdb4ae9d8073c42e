"""
Inventory orchestration: the joined listing, single item lookup,
per-store metrics and the quantity/threshold upsert.

The listing and metrics both read through ``queries.join_inventory`` so a
row is only counted while its store and product are live, regardless of
whether a cascade reached it.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from sqlalchemy import and_, case, func, or_
from sqlmodel import Session, select

from ..core.errors import ConflictError, InvalidIdError, NotFoundError
from ..models import DEFAULT_LOW_STOCK_THRESHOLD, Inventory, Product, Store, parse_id
from ..queries import inventory_order, join_inventory, low_stock_condition, project_inventory_row
from ..repository import InventoryRepository, ProductRepository, StoreRepository
from ..schemas import InventoryCreate, InventoryQuery, InventoryUpdate

logger = logging.getLogger(__name__)


@dataclass
class InventoryPage:
    page: int
    limit: int
    total: int = 0
    data: List[Dict[str, Any]] = field(default_factory=list)


class InventoryService:
    def __init__(self, session: Session):
        self.session = session
        self.inventory = InventoryRepository(session)
        self.stores = StoreRepository(session)
        self.products = ProductRepository(session)

    def list_inventory(self, query: InventoryQuery) -> InventoryPage:
        page = InventoryPage(page=query.page, limit=query.limit)

        criteria: List[Any] = []
        if query.store_id is not None:
            criteria.append(Inventory.store_id == query.store_id)

        if query.search:
            product_ids = self._matching_product_ids(query.search)
            store_ids = self.stores.ids(Store.name.icontains(query.search, autoescape=True))
            matches = []
            if product_ids:
                matches.append(Inventory.product_id.in_(product_ids))
            if store_ids:
                matches.append(Inventory.store_id.in_(store_ids))
            if not matches:
                return page
            criteria.append(or_(*matches))

        if query.low_stock_only:
            criteria.append(low_stock_condition())

        product_criteria: List[Any] = []
        if query.category:
            product_criteria.append(Product.category == query.category)
        if query.min_price is not None:
            product_criteria.append(Product.price >= query.min_price)
        if query.max_price is not None:
            product_criteria.append(Product.price <= query.max_price)

        count_statement = join_inventory(
            select(func.count()).select_from(Inventory), criteria, product_criteria
        )
        page.total = self.inventory.aggregate(count_statement).one()

        rows_statement = (
            join_inventory(select(Inventory, Store, Product).select_from(Inventory), criteria, product_criteria)
            .order_by(*inventory_order(query.sort))
            .offset(query.offset)
            .limit(query.limit)
        )
        page.data = [project_inventory_row(*row) for row in self.inventory.aggregate(rows_statement).all()]
        return page

    def get_inventory_item(self, id: str) -> Dict[str, Any]:
        inventory_id = parse_id(id)
        if inventory_id is None:
            raise InvalidIdError("Invalid inventory ID")

        statement = join_inventory(
            select(Inventory, Store, Product).select_from(Inventory), [Inventory.id == inventory_id]
        )
        row = self.inventory.aggregate(statement).first()
        if row is None:
            raise NotFoundError("Inventory item not found")
        return project_inventory_row(*row)

    def get_store_metrics(self, store_id_or_slug: str) -> Dict[str, Any]:
        store = self._resolve_store(store_id_or_slug)

        statement = (
            select(
                func.coalesce(func.sum(Inventory.quantity), 0),
                func.coalesce(func.sum(Inventory.quantity * Product.price), 0),
                func.coalesce(func.sum(case((low_stock_condition(), 1), else_=0)), 0),
            )
            .select_from(Inventory)
            .join(Product, and_(Product.id == Inventory.product_id, Product.deleted_at.is_(None)))
            .where(Inventory.store_id == store.id)
        )
        total_stock, total_value, low_stock_count = self.inventory.aggregate(statement).one()
        return {
            "totalStock": int(total_stock),
            "totalValue": round(float(total_value), 2),
            "lowStockCount": int(low_stock_count),
            "lowStockThreshold": DEFAULT_LOW_STOCK_THRESHOLD,
        }

    def update_inventory(self, store_id_or_slug: str, product_id: str, data: InventoryUpdate) -> Inventory:
        """Create or update the row for a store/product pair, reactivating it if it was removed."""
        product_uuid = self._parse_product_id(product_id)
        store = self._resolve_store(store_id_or_slug)
        product = self.products.get(product_uuid)
        if product is None:
            raise NotFoundError("Product not found")

        inventory = self.inventory.upsert(store.id, product.id, data.changes())
        logger.info(
            "Upserted inventory %s for store %s product %s (quantity=%s)",
            inventory.id,
            store.id,
            product.id,
            inventory.quantity,
        )
        return inventory

    def create_inventory(self, data: InventoryCreate) -> Inventory:
        """Insert a new row; an existing row for the pair, removed or not, is a conflict."""
        if self.stores.get(data.store_id) is None:
            raise NotFoundError("Store not found")
        if self.products.get(data.product_id) is None:
            raise NotFoundError("Product not found")
        if self.inventory.for_pair(data.store_id, data.product_id, with_deleted=True) is not None:
            raise ConflictError("Product is already stocked in this store")

        inventory = Inventory(store_id=data.store_id, product_id=data.product_id, quantity=data.quantity)
        if data.low_stock_threshold is not None:
            inventory.low_stock_threshold = data.low_stock_threshold
        inventory = self.inventory.add(inventory)
        logger.info("Created inventory %s", inventory.id)
        return inventory

    def remove_from_store(self, store_id_or_slug: str, product_id: str) -> None:
        product_uuid = self._parse_product_id(product_id)
        store = self._resolve_store(store_id_or_slug)

        inventory = self.inventory.soft_delete(
            Inventory.store_id == store.id,
            Inventory.product_id == product_uuid,
        )
        if inventory is None:
            raise NotFoundError("Inventory item not found")
        logger.info("Removed product %s from store %s", product_uuid, store.id)

    def _matching_product_ids(self, search: str) -> List[Any]:
        # Any token hitting sku, name or category matches, as does the exact SKU
        clauses = [Product.sku == search.upper()]
        for token in search.split():
            clauses.extend(
                column.icontains(token, autoescape=True)
                for column in (Product.sku, Product.name, Product.category)
            )
        return self.products.ids(or_(*clauses))

    def _resolve_store(self, store_id_or_slug: str) -> Store:
        store = self.stores.by_id_or_slug(store_id_or_slug)
        if store is None:
            raise NotFoundError("Store not found")
        return store

    @staticmethod
    def _parse_product_id(value: str):
        product_id = parse_id(value)
        if product_id is None:
            raise InvalidIdError("Invalid product ID")
        return product_id
