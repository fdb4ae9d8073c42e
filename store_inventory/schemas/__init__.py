"""
Pydantic request schemas.

Bodies are validated here before they reach the services; the
persistence models in ``store_inventory.models`` are never bound
directly to a request.
"""

from .inventory import InventoryCreate, InventoryQuery, InventoryUpdate
from .product import ProductCreate, ProductUpdate
from .store import StoreCreate, StoreUpdate

__all__ = [
    "InventoryCreate",
    "InventoryQuery",
    "InventoryUpdate",
    "ProductCreate",
    "ProductUpdate",
    "StoreCreate",
    "StoreUpdate",
]
