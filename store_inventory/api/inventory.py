from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ..core import responses
from ..core.errors import InvalidIdError
from ..models import parse_id
from ..queries import INVENTORY_PAGE_LIMIT, InventorySort
from ..schemas import InventoryCreate, InventoryQuery
from ..services import InventoryService, get_inventory_service

router = APIRouter()


def inventory_query(
    store_id: Optional[str] = Query(None, alias="storeId"),
    search: Optional[str] = Query(None, max_length=100),
    category: Optional[str] = Query(None, max_length=50),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    low_stock_only: bool = Query(False, alias="lowStockOnly"),
    sort: Optional[InventorySort] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(INVENTORY_PAGE_LIMIT),
) -> InventoryQuery:
    store_uuid = None
    if store_id and store_id.strip():
        store_uuid = parse_id(store_id)
        if store_uuid is None:
            raise InvalidIdError("Invalid store ID")

    return InventoryQuery(
        store_id=store_uuid,
        search=search,
        category=category,
        min_price=min_price,
        max_price=max_price,
        low_stock_only=low_stock_only,
        sort=sort,
        page=page,
        limit=limit,
    )


@router.get("")
def get_inventory(
    query: InventoryQuery = Depends(inventory_query),
    service: InventoryService = Depends(get_inventory_service),
):
    result = service.list_inventory(query)
    return responses.paginated(result.data, result.page, result.limit, result.total, "Inventory fetched")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_inventory(data: InventoryCreate, service: InventoryService = Depends(get_inventory_service)):
    inventory = service.create_inventory(data)
    return responses.success(inventory.to_json(), "Inventory created", status.HTTP_201_CREATED)


@router.get("/{inventory_id}")
def get_inventory_item(inventory_id: str, service: InventoryService = Depends(get_inventory_service)):
    return responses.success(service.get_inventory_item(inventory_id), "Inventory item fetched")
