"""
Service layer.

Each service wraps one request-scoped ``Session``; the ``get_*``
factories let FastAPI build them from the session dependency.
"""

from fastapi import Depends
from sqlmodel import Session

from ..database import get_session
from .inventory_service import InventoryPage, InventoryService
from .product_service import ProductService
from .store_service import StoreService


def get_store_service(session: Session = Depends(get_session)) -> StoreService:
    return StoreService(session)


def get_product_service(session: Session = Depends(get_session)) -> ProductService:
    return ProductService(session)


def get_inventory_service(session: Session = Depends(get_session)) -> InventoryService:
    return InventoryService(session)


__all__ = [
    "InventoryPage",
    "InventoryService",
    "ProductService",
    "StoreService",
    "get_inventory_service",
    "get_product_service",
    "get_store_service",
]
