"""
Store orchestration.

Stores are addressed by id for writes and by id *or* slug for reads:
anything that parses as a UUID is looked up by id, everything else is
treated as a slug.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import and_, func
from sqlmodel import Session, select

from ..core.errors import InvalidIdError, NotFoundError
from ..models import Inventory, Store, parse_id, to_iso
from ..repository import StoreRepository
from ..schemas import StoreCreate, StoreUpdate

logger = logging.getLogger(__name__)


class StoreService:
    def __init__(self, session: Session):
        self.session = session
        self.stores = StoreRepository(session)

    def list_stores(self) -> List[Dict[str, Any]]:
        """Live stores with the number of live inventory rows each one carries."""
        product_count = func.count(Inventory.id).label("product_count")
        statement = (
            select(Store, product_count)
            .outerjoin(Inventory, and_(Inventory.store_id == Store.id, Inventory.deleted_at.is_(None)))
            .group_by(Store.id)
            .order_by(product_count.desc(), Store.name)
        )
        return [
            {
                "_id": str(store.id),
                "name": store.name,
                "slug": store.slug,
                "productCount": count,
                "createdAt": to_iso(store.created_at),
                "updatedAt": to_iso(store.updated_at),
            }
            for store, count in self.stores.aggregate(statement).all()
        ]

    def get_store(self, id_or_slug: str) -> Store:
        store = self.stores.by_id_or_slug(id_or_slug)
        if store is None:
            raise NotFoundError("Store not found")
        return store

    def create_store(self, data: StoreCreate) -> Store:
        store = self.stores.add(Store(**data.model_dump()))
        logger.info("Created store %s (%s)", store.id, store.slug)
        return store

    def update_store(self, id: str, data: StoreUpdate) -> Store:
        store_id = self._parse_id(id)
        values = data.model_dump(exclude_unset=True, exclude_none=True)
        store = self.stores.update_one(Store.id == store_id, values=values)
        if store is None:
            raise NotFoundError("Store not found")
        return store

    def delete_store(self, id: str) -> None:
        store_id = self._parse_id(id)
        store = self.stores.soft_delete(Store.id == store_id)
        if store is None:
            raise NotFoundError("Store not found")
        logger.info("Deleted store %s", store.id)

    @staticmethod
    def _parse_id(value: str):
        store_id = parse_id(value)
        if store_id is None:
            raise InvalidIdError("Invalid store ID")
        return store_id
