"""Store Inventory API: stores, products and per-store stock levels."""

__version__ = "1.0.0"
