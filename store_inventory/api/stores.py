from fastapi import APIRouter, Depends, status

from ..core import responses
from ..schemas import InventoryUpdate, StoreCreate, StoreUpdate
from ..services import InventoryService, StoreService, get_inventory_service, get_store_service

router = APIRouter()


@router.get("")
def get_stores(service: StoreService = Depends(get_store_service)):
    return responses.success(service.list_stores(), "Stores fetched")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_store(data: StoreCreate, service: StoreService = Depends(get_store_service)):
    store = service.create_store(data)
    return responses.success(store.to_json(), "Store created", status.HTTP_201_CREATED)


@router.get("/{store_id}")
def get_store(store_id: str, service: StoreService = Depends(get_store_service)):
    # Accepts either the store id or its slug
    return responses.success(service.get_store(store_id).to_json(), "Store fetched")


@router.patch("/{store_id}")
def update_store(store_id: str, data: StoreUpdate, service: StoreService = Depends(get_store_service)):
    return responses.success(service.update_store(store_id, data).to_json(), "Store updated")


@router.delete("/{store_id}")
def delete_store(store_id: str, service: StoreService = Depends(get_store_service)):
    service.delete_store(store_id)
    return responses.deleted("Store deleted")


@router.get("/{store_id_or_slug}/metrics")
def get_store_metrics(store_id_or_slug: str, service: InventoryService = Depends(get_inventory_service)):
    return responses.success(service.get_store_metrics(store_id_or_slug), "Store metrics fetched")


@router.patch("/{store_id_or_slug}/inventory/{product_id}")
def update_inventory(
    store_id_or_slug: str,
    product_id: str,
    data: InventoryUpdate,
    service: InventoryService = Depends(get_inventory_service),
):
    inventory = service.update_inventory(store_id_or_slug, product_id, data)
    return responses.success(inventory.to_json(), "Inventory updated")


@router.delete("/{store_id_or_slug}/inventory/{product_id}")
def remove_inventory(
    store_id_or_slug: str,
    product_id: str,
    service: InventoryService = Depends(get_inventory_service),
):
    service.remove_from_store(store_id_or_slug, product_id)
    return responses.deleted("Product removed from store")
