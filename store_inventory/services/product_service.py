import logging
from typing import List

from sqlmodel import Session

from ..core.errors import InvalidIdError, NotFoundError
from ..models import Product, parse_id
from ..repository import ProductRepository
from ..schemas import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, session: Session):
        self.session = session
        self.products = ProductRepository(session)

    def list_products(self) -> List[Product]:
        return self.products.find(order_by=[Product.name, Product.id])

    def get_product(self, id: str) -> Product:
        product = self.products.find_one(Product.id == self._parse_id(id))
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def create_product(self, data: ProductCreate) -> Product:
        # Duplicate SKUs surface as IntegrityError and become a 409
        product = self.products.add(Product(**data.model_dump()))
        logger.info("Created product %s (%s)", product.id, product.sku)
        return product

    def update_product(self, id: str, data: ProductUpdate) -> Product:
        product_id = self._parse_id(id)
        values = data.model_dump(exclude_unset=True, exclude_none=True)
        product = self.products.update_one(Product.id == product_id, values=values)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def delete_product(self, id: str) -> None:
        product = self.products.soft_delete(Product.id == self._parse_id(id))
        if product is None:
            raise NotFoundError("Product not found")
        logger.info("Deleted product %s", product.id)

    @staticmethod
    def _parse_id(value: str):
        product_id = parse_id(value)
        if product_id is None:
            raise InvalidIdError("Invalid product ID")
        return product_id
