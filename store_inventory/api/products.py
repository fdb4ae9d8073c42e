from fastapi import APIRouter, Depends, status

from ..core import responses
from ..schemas import ProductCreate, ProductUpdate
from ..services import ProductService, get_product_service

router = APIRouter()


@router.get("")
def get_products(service: ProductService = Depends(get_product_service)):
    products = [product.to_json() for product in service.list_products()]
    return responses.success(products, "Products fetched")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(data: ProductCreate, service: ProductService = Depends(get_product_service)):
    product = service.create_product(data)
    return responses.success(product.to_json(), "Product created", status.HTTP_201_CREATED)


@router.get("/{product_id}")
def get_product(product_id: str, service: ProductService = Depends(get_product_service)):
    return responses.success(service.get_product(product_id).to_json(), "Product fetched")


@router.patch("/{product_id}")
def update_product(product_id: str, data: ProductUpdate, service: ProductService = Depends(get_product_service)):
    return responses.success(service.update_product(product_id, data).to_json(), "Product updated")


@router.delete("/{product_id}")
def delete_product(product_id: str, service: ProductService = Depends(get_product_service)):
    service.delete_product(product_id)
    return responses.deleted("Product deleted")
