from .base import SoftDeleteMixin, TimestampMixin, parse_id, to_iso, utcnow
from .inventory import DEFAULT_LOW_STOCK_THRESHOLD, Inventory
from .product import Product, normalize_sku
from .store import Store, slugify

__all__ = [
    "DEFAULT_LOW_STOCK_THRESHOLD",
    "Inventory",
    "Product",
    "SoftDeleteMixin",
    "Store",
    "TimestampMixin",
    "normalize_sku",
    "parse_id",
    "slugify",
    "to_iso",
    "utcnow",
]
