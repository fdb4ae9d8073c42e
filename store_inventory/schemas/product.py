from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints

Sku = Annotated[str, StringConstraints(strip_whitespace=True, to_upper=True, min_length=1, max_length=32)]
ProductName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
Category = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


class ProductCreate(BaseModel):
    sku: Sku = Field(..., examples=["ELEC-001"])
    name: ProductName = Field(..., examples=["Wireless Headphones"])
    category: Category = Field(..., examples=["Electronics"])
    price: float = Field(..., ge=0, examples=[79.99])


class ProductUpdate(BaseModel):
    sku: Optional[Sku] = None
    name: Optional[ProductName] = None
    category: Optional[Category] = None
    price: Optional[float] = Field(None, ge=0)
