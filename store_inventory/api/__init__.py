from .inventory import router as inventory_router
from .products import router as products_router
from .stores import router as stores_router

__all__ = ["inventory_router", "products_router", "stores_router"]
